# automaton.py
# Deterministic finite automaton: the 5-tuple (Q, Sigma, delta, q0, F)
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# The literal string "e" stands for the empty string when passed to DFA.accepts.
EPSILON = 'e'


@dataclass(frozen=True)
class State:
    """Immutable named identity of a state."""
    name: str


class DFAState:
    """A state identity together with its outgoing transitions."""
    def __init__(self, name):
        self.state = State(name); self._transitions = {}

    @property
    def name(self):
        return self.state.name

    def add_transition(self, symbol, to_state):
        self._transitions[symbol] = to_state

    def get_transition(self, symbol):
        return self._transitions.get(symbol)

    def transitions(self):
        return {symbol: to_state.name for symbol, to_state in self._transitions.items()}


class DFA:
    """Builds, queries and renders a deterministic finite automaton.

    States and alphabet symbols keep the order they were added in; that order
    drives swap() and the text produced by str().
    Fallible operations report failure through their return value (False or
    None) and leave the automaton untouched.
    """
    def __init__(self):
        self._states = {}    # Q, name -> DFAState, insertion ordered
        self._sigma = {}     # Sigma, used as an ordered set
        self._final = {}     # F, used as an ordered set of names
        self._start = None   # q0

    # ---------------------------------------------------------------
    # construction
    # ---------------------------------------------------------------
    def add_state(self, name):
        if name in self._states:
            logger.debug("add_state(%r): state already exists", name); return False
        self._states[name] = DFAState(name)
        return True

    def set_start(self, name):
        state = self._states.get(name)
        if state is None:
            logger.debug("set_start(%r): unknown state", name); return False
        self._start = state
        return True

    def set_final(self, name):
        if name not in self._states:
            logger.debug("set_final(%r): unknown state", name); return False
        self._final[name] = None
        return True

    def add_sigma(self, symbol):
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise ValueError(f"alphabet symbols must be single characters, got {symbol!r}")
        self._sigma.setdefault(symbol, None)

    def add_transition(self, from_state, to_state, symbol):
        source = self._states.get(from_state); destination = self._states.get(to_state)
        if source is None or destination is None or symbol not in self._sigma:
            logger.debug("add_transition(%r, %r, %r) rejected", from_state, to_state, symbol)
            return False
        source.add_transition(symbol, destination)
        return True

    # ---------------------------------------------------------------
    # queries
    # ---------------------------------------------------------------
    def get_sigma(self):
        return list(self._sigma)

    def get_state(self, name):
        state = self._states.get(name)
        return state.state if state is not None else None

    def is_final(self, name):
        return name in self._states and name in self._final

    def is_start(self, name):
        if name not in self._states or self._start is None: return False
        return self._start.name == name

    def accepts(self, s):
        """Return True if the automaton accepts ``s``.

        ``"e"`` is read as the empty string, so the one-character input made
        of the symbol 'e' can never be walked. A character without a
        transition from the current state rejects the input.
        """
        if self._start is None: return False
        current = self._start
        if s == EPSILON: return current.name in self._final
        for symbol in s:
            current = current.get_transition(symbol)
            if current is None: return False
        return current.name in self._final

    @property
    def start(self):
        return self._start.name if self._start is not None else None

    def states(self):
        return list(self._states)

    def final_states(self):
        return list(self._final)

    def delta(self, name, symbol):
        state = self._states.get(name)
        if state is None: return None
        to_state = state.get_transition(symbol)
        return to_state.name if to_state is not None else None

    def transitions(self):
        """Yield every edge as ``(from, symbol, to)``, ordered by state then by insertion."""
        for state in self._states.values():
            for symbol, to_name in state.transitions().items():
                yield state.name, symbol, to_name

    def __len__(self):
        return len(self._states)

    def __contains__(self, name):
        return name in self._states

    # ---------------------------------------------------------------
    # transforms
    # ---------------------------------------------------------------
    def swap(self, symb1, symb2):
        """Return a copy of this DFA with the edge labels ``symb1`` and ``symb2`` exchanged.

        Returns None when either symbol is missing from the alphabet. The
        alphabet, states, start state and final states are copied as they are.
        """
        if symb1 not in self._sigma or symb2 not in self._sigma:
            logger.debug("swap(%r, %r): symbol not in alphabet", symb1, symb2); return None
        swapped = DFA()
        for symbol in self._sigma: swapped.add_sigma(symbol)
        for name in self._states: swapped.add_state(name)
        if self._start is not None: swapped.set_start(self._start.name)
        for name in self._final: swapped.set_final(name)
        relabel = {symb1: symb2, symb2: symb1}
        for from_name, symbol, to_name in self.transitions():
            swapped.add_transition(from_name, to_name, relabel.get(symbol, symbol))
        return swapped

    # ---------------------------------------------------------------
    # rendering
    # ---------------------------------------------------------------
    def __str__(self):
        lines = [f"Q = {_braces(self._states)}", f"Sigma = {_braces(self._sigma)}", "delta =",
                 "\t" + "".join(f"{symbol}\t" for symbol in self._sigma)]
        for name in self._states:
            lines.append(f"{name}\t" + "".join(f"{self.delta(name, symbol) or ''}\t" for symbol in self._sigma))
        lines.append(f"q0 = {self.start or ''}")
        lines.append(f"F = {_braces(self._final)}")
        return "\n".join(lines) + "\n"

    def __repr__(self):
        return f"<DFA states={len(self._states)} sigma={''.join(self._sigma)!r} start={self.start!r}>"


def _braces(items):
    return "{ " + " ".join(items) + " }"
