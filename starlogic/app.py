# --- File: starlogic/app.py ---
# Description: HTTP API over the deduction engine.
import logging

from flask import Flask, jsonify, request
from flask_cors import CORS

from starlogic.exceptions import InvalidInput, InvariantViolation, OracleViolation
from starlogic import puzzle_handler as pz
from starlogic.runner import deduce

app = Flask(__name__)
CORS(app)


def _region_grid_from_request(data):
    """Accepts either a 'regionGrid' matrix or an 'importString' (SBN or web task)."""
    if not isinstance(data, dict):
        raise InvalidInput("Request body must be a JSON object")
    region_grid = data.get('regionGrid')
    if region_grid is not None:
        if not isinstance(region_grid, list) or not all(isinstance(row, list) for row in region_grid):
            raise InvalidInput("regionGrid must be a list of rows")
        return region_grid
    import_string = data.get('importString')
    if not import_string or not isinstance(import_string, str):
        raise InvalidInput("Missing regionGrid or importString in request")
    return pz.import_region_grid(import_string)


@app.route('/api/deduce', methods=['POST'])
def deduce_puzzle():
    try:
        data = request.get_json(silent=True) or {}
        region_grid = _region_grid_from_request(data)
        board, solver = deduce(region_grid, trace=True)
        return jsonify({
            'playerGrid': board.state_grid(),
            'isSolved': solver.is_solved,
            'difficultyScore': solver.difficulty_score,
            'techniques': dict(solver.technique_log),
            'exportString': pz.export_board(board, region_grid) if board.height == board.width else None,
        })
    except InvalidInput as e:
        return jsonify({'error': str(e)}), 400
    except InvariantViolation as e:
        logging.error(f"Invariant violated in /api/deduce: {e}")
        return jsonify({'error': 'Solver invariant violated'}), 500
    except Exception:
        logging.exception("Error in /api/deduce")
        return jsonify({'error': 'An internal error occurred'}), 500


@app.route('/api/verify', methods=['POST'])
def verify_puzzle():
    """Runs the solver with a Z3 reference attached and reports whether every deduction held."""
    try:
        data = request.get_json(silent=True) or {}
        region_grid = _region_grid_from_request(data)
        board, solver = deduce(region_grid, verify=True)
        return jsonify({
            'sound': True,
            'isSolved': solver.is_solved,
            'playerGrid': board.state_grid(),
        })
    except OracleViolation as e:
        logging.error(f"Unsound deduction in /api/verify: {e}")
        return jsonify({'sound': False, 'error': str(e)})
    except InvalidInput as e:
        return jsonify({'error': str(e)}), 400
    except InvariantViolation as e:
        logging.error(f"Invariant violated in /api/verify: {e}")
        return jsonify({'sound': False, 'error': str(e)})
    except Exception:
        logging.exception("Error in /api/verify")
        return jsonify({'error': 'An internal error occurred'}), 500
