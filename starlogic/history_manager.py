"""**********************************************************************************
 * Title: history_manager.py
 *
 * @version 1.0.0
 * -------------------------------------------------------------------------------
 * Description:
 * This file defines the HistoryManager class, which records the mutations the
 * deduction engine makes to a board. Attached to a Board, it receives one
 * change per star() or shade() call, in program order. It can rebuild the
 * state grid at any point of the deduction, step backwards and forwards
 * through it, and serialize the whole trace into the compact SBN history
 * suffix so a deduction can be exported alongside its puzzle.
 **********************************************************************************"""

# --- IMPORTS ---
import copy
import logging

from starlogic.constants import SBN_CHAR_TO_INT, SBN_INT_TO_CHAR


# --- CLASS DEFINITION ---
class HistoryManager:
    """Ordered log of cell changes with a replay pointer."""
    def __init__(self, initial_state):
        """
        :param list[list[int]] initial_state: The state grid before the first change.
        """
        self.initial_state = copy.deepcopy(initial_state)
        self.changes = []
        self.pointer = 0

    def add_change(self, change):
        """
        Appends a change, discarding any changes past the pointer first.

        :param dict change: ``{'r': row, 'c': col, 'from': old_state, 'to': new_state}``.
        """
        if self.pointer < len(self.changes):
            self.changes = self.changes[:self.pointer]
        self.changes.append(change)
        self.pointer += 1

    def get_current_grid(self):
        """Rebuilds the state grid with every change up to the pointer applied."""
        grid = copy.deepcopy(self.initial_state)
        for change in self.changes[:self.pointer]:
            grid[change['r']][change['c']] = change['to']
        return grid

    def undo(self):
        if self.can_undo(): self.pointer -= 1

    def redo(self):
        if self.can_redo(): self.pointer += 1

    def can_undo(self): return self.pointer > 0

    def can_redo(self): return self.pointer < len(self.changes)

    def serialize(self):
        """Encodes the trace as ``h:<changes>:<pointer>``, four SBN characters per change."""
        if not self.changes: return ""
        changes = [
            f"{SBN_INT_TO_CHAR.get(c['r'], '0')}{SBN_INT_TO_CHAR.get(c['c'], '0')}"
            f"{SBN_INT_TO_CHAR.get(c['from'], '0')}{SBN_INT_TO_CHAR.get(c['to'], '0')}"
            for c in self.changes
        ]
        pointer = _encode_pointer(self.pointer)
        return f"h:{''.join(changes)}:{pointer}"

    @classmethod
    def deserialize(cls, initial_state, history_string):
        """
        Rebuilds a manager from a serialized trace.

        A missing or malformed string yields a fresh manager with no changes.
        """
        manager = cls(initial_state)
        if not history_string or not history_string.startswith('h:'):
            return manager
        try:
            _, change_data, pointer_data = history_string.split(':')
            for i in range(0, len(change_data) - 3, 4):
                s = change_data[i:i + 4]
                manager.changes.append({
                    'r': SBN_CHAR_TO_INT[s[0]],
                    'c': SBN_CHAR_TO_INT[s[1]],
                    'from': SBN_CHAR_TO_INT[s[2]],
                    'to': SBN_CHAR_TO_INT[s[3]],
                })
            manager.pointer = min(_decode_pointer(pointer_data), len(manager.changes))
        except (KeyError, ValueError) as e:
            logging.error(f"Error deserializing history: {e}")
            return cls(initial_state)
        return manager


def _encode_pointer(value):
    # Base-64 digits, most significant first; a single character below 64.
    digits = SBN_INT_TO_CHAR[value % 64]
    while value >= 64:
        value //= 64
        digits = SBN_INT_TO_CHAR[value % 64] + digits
    return digits


def _decode_pointer(text):
    if not text:
        raise ValueError("empty history pointer")
    value = 0
    for ch in text:
        value = value * 64 + SBN_CHAR_TO_INT[ch]
    return value
