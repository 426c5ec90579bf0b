# run.py
# This script launches the Flask application.
# Install the project in editable mode (pip install -e .) so the 'starlogic'
# package resolves without any path manipulation.

from starlogic.app import app

if __name__ == '__main__':
    # The 'debug=True' flag enables auto-reloading when package files are changed.
    app.run(host='0.0.0.0', port=5001, debug=True)
