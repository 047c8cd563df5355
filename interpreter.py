# interpreter.py
# Loads DFA definitions from text, simulates them with a trace and draws them
import logging
import re

import pandas as pd
from graphviz import Digraph

from automaton import DFA, EPSILON

logger = logging.getLogger(__name__)

# ===================================================================
#  1. DEFINITION LANGUAGE
# ===================================================================

KEYWORDS = ('states', 'alphabet', 'start', 'final', 'transitions', 'end', 'eps')


class Lexer:
    """Breaks the definition text into a stream of tokens."""
    token_specs = [('COMMENT', r'#.*'), ('KEYWORD', r'\b(%s)\b' % '|'.join(KEYWORDS)), ('IDENTIFIER', r'[a-zA-Z0-9_]+'),
                   ('ARROW', r'->'), ('LPAREN', r'\('), ('RPAREN', r'\)'), ('COMMA', r','), ('COLON', r':'),
                   ('NEWLINE', r'\n'), ('WHITESPACE', r'[ \t\r]+'), ('UNKNOWN', r'.')]
    token_regex = re.compile('|'.join(f'(?P<{name}>{pattern})' for name, pattern in token_specs))

    def __init__(self, source_code):
        self.source_code = source_code; self.tokens = []; self.current_line = 1; self.current_col = 1

    def tokenize(self):
        for match in self.token_regex.finditer(self.source_code):
            token_type = match.lastgroup; token_value = match.group()
            if token_type == 'NEWLINE': self.current_line += 1; self.current_col = 1; continue
            token_line = self.current_line; token_col = self.current_col; self.current_col += len(token_value)
            if token_type not in ('COMMENT', 'WHITESPACE'): self.tokens.append((token_type, token_value, token_line, token_col))
        return self.tokens


class Parser:
    """Reads a token stream into a DFA definition and builds the DFA from it."""
    def __init__(self, tokens):
        self.tokens = tokens; self.current_token_index = 0
        self.fa = {'states': [], 'alphabet': [], 'start_state': None, 'final': [], 'transitions': {}}

    def _current_token(self):
        if self.current_token_index < len(self.tokens): return self.tokens[self.current_token_index]
        return None

    def parse(self):
        """Parse the tokens and return the resulting DFA.

        Raises SyntaxError for malformed text and ValueError for definitions
        that are well formed but do not describe a valid DFA.
        """
        while self._current_token():
            token_type, token_value, line, col = self._current_token()
            if token_type != 'KEYWORD': raise SyntaxError(f"[Line {line}, Col {col}] Unexpected token '{token_value}'. Expected a keyword.")
            if token_value in ('states', 'alphabet', 'final'): self._parse_list(token_value)
            elif token_value == 'start': self._parse_single_value('start_state')
            elif token_value == 'transitions': self._parse_transitions()
            elif token_value == 'end': break
            else: raise SyntaxError(f"[Line {line}, Col {col}] Unexpected keyword '{token_value}'.")
        self._validate_semantics()
        return self.build()

    def _expect(self, expected_type, expected_value=None):
        token = self._current_token()
        if not token: raise SyntaxError(f"Unexpected end of file. Expected '{expected_type}'.")
        token_type, token_value, line, col = token
        if token_type != expected_type or (expected_value and token_value != expected_value):
            raise SyntaxError(f"[Line {line}, Col {col}] Expected '{expected_type}' but got '{token_type}:{token_value}'.")
        self.current_token_index += 1
        return token_value

    def _parse_list(self, key):
        self._expect('KEYWORD', key); self._expect('COLON')
        while self._current_token() and self._current_token()[0] == 'IDENTIFIER':
            identifier = self._expect('IDENTIFIER')
            if identifier not in self.fa[key]: self.fa[key].append(identifier)
            if self._current_token() and self._current_token()[0] == 'COMMA': self.current_token_index += 1
            else: break

    def _parse_single_value(self, key):
        self._expect('KEYWORD'); self._expect('COLON'); self.fa[key] = self._expect('IDENTIFIER')

    def _parse_transitions(self):
        self._expect('KEYWORD', 'transitions'); self._expect('COLON')
        while self._current_token() and self._current_token()[0] != 'KEYWORD':
            self._expect('LPAREN'); from_state = self._expect('IDENTIFIER'); self._expect('COMMA')
            symbol_token = self._current_token()
            if not symbol_token: raise SyntaxError("Unexpected end of file. Expected a transition symbol.")
            if symbol_token[0] not in ('IDENTIFIER', 'KEYWORD'):
                _, val, line, col = symbol_token
                raise SyntaxError(f"[Line {line}, Col {col}] Expected IDENTIFIER or 'eps' for transition symbol, but got '{val}'.")
            symbol = symbol_token[1]; symbol_line = symbol_token[2]; self.current_token_index += 1
            self._expect('RPAREN'); self._expect('ARROW')
            to_states = []
            while self._current_token() and self._current_token()[0] == 'IDENTIFIER':
                to_state = self._expect('IDENTIFIER')
                if to_state not in to_states: to_states.append(to_state)
                if self._current_token() and self._current_token()[0] == 'COMMA': self._expect('COMMA')
                else: break
            if not to_states: raise SyntaxError(f"[Line {symbol_line}] Expected at least one destination state.")
            # a repeated (state, symbol) rule replaces the earlier one
            self.fa['transitions'].setdefault(from_state, {})[symbol] = to_states

    def _validate_semantics(self):
        states = self.fa['states']; alphabet = self.fa['alphabet']
        for symbol in alphabet:
            if len(symbol) != 1: raise ValueError(f"Semantic Error: Alphabet symbol '{symbol}' must be a single character.")
        if self.fa['start_state'] and self.fa['start_state'] not in states:
            raise ValueError(f"Semantic Error: Start state '{self.fa['start_state']}' is not declared.")
        for f_state in self.fa['final']:
            if f_state not in states: raise ValueError(f"Semantic Error: Final state '{f_state}' is not declared.")
        for from_state, transitions in self.fa['transitions'].items():
            if from_state not in states: raise ValueError(f"Semantic Error: Transition state '{from_state}' is not declared.")
            for symbol, to_states in transitions.items():
                if symbol == 'eps': raise ValueError(f"Semantic Error: Epsilon transition from '{from_state}' is not allowed in a DFA.")
                if symbol not in alphabet: raise ValueError(f"Semantic Error: Transition symbol '{symbol}' is not in the alphabet.")
                for to_state in to_states:
                    if to_state not in states: raise ValueError(f"Semantic Error: Transition state '{to_state}' is not declared.")
                if len(to_states) > 1:
                    raise ValueError(f"Semantic Error: Transition ({from_state},{symbol}) has {len(to_states)} destinations; a DFA allows one.")

    def build(self):
        dfa = DFA()
        for symbol in self.fa['alphabet']: dfa.add_sigma(symbol)
        for state in self.fa['states']: dfa.add_state(state)
        if self.fa['start_state']: dfa.set_start(self.fa['start_state'])
        for state in self.fa['final']: dfa.set_final(state)
        for from_state, transitions in self.fa['transitions'].items():
            for symbol, (to_state,) in transitions.items(): dfa.add_transition(from_state, to_state, symbol)
        logger.debug("built %r", dfa)
        return dfa


def load_dfa(text):
    """Parse definition text straight into a DFA."""
    return Parser(Lexer(text).tokenize()).parse()


def build_definition(states, alphabet, start, final, transitions):
    """Assemble the fields of the 5-tuple into definition text."""
    return f"states:{states}\nalphabet:{alphabet}\nstart:{start}\nfinal:{final}\ntransitions:\n{transitions}\nend"

# ===================================================================
#  2. SIMULATION
# ===================================================================

class Simulator:
    """Runs a DFA over an input string and records the path it takes."""
    def __init__(self, dfa):
        self.dfa = dfa

    def run_with_trace(self, input_string):
        """Return ``(result, trace, path)``.

        ``trace`` lists ``(from, symbol, to)`` steps, ``path`` the visited
        states. The verdict in ``result`` always agrees with DFA.accepts.
        """
        trace = []; current_state = self.dfa.start; alphabet = set(self.dfa.get_sigma())
        if current_state is None: return "Rejected (Runtime Error: No start state defined)", trace, None
        path = [current_state]
        if input_string == EPSILON: return _verdict(self.dfa.is_final(current_state)), trace, path
        for symbol in input_string:
            if symbol not in alphabet: return f"Rejected (Runtime Error: Input symbol '{symbol}' not in alphabet)", trace, path
            next_state = self.dfa.delta(current_state, symbol)
            if next_state is None: return "Rejected (Runtime Error: No transition defined)", trace, path
            trace.append((current_state, symbol, next_state))
            path.append(next_state); current_state = next_state
        return _verdict(self.dfa.is_final(current_state)), trace, path


def _verdict(accepted):
    return "Accepted" if accepted else "Rejected"

# ===================================================================
#  3. TABLES
# ===================================================================

def delta_table(dfa):
    """The transition function as a DataFrame: one row per state, one column per symbol."""
    sigma = dfa.get_sigma()
    rows = [[dfa.delta(state, symbol) or '' for symbol in sigma] for state in dfa.states()]
    return pd.DataFrame(rows, index=pd.Index(dfa.states(), name='State'), columns=sigma, dtype=object)


def trace_table(trace):
    path_data = [{"Step": i + 1, "From State": f, "Input": s, "To State": t} for i, (f, s, t) in enumerate(trace)]
    return pd.DataFrame(path_data, columns=["Step", "From State", "Input", "To State"]).set_index('Step')


def batch_table(dfa, strings):
    strings = list(strings)
    return pd.DataFrame({"Input": strings, "Accepted": [dfa.accepts(s) for s in strings]}, columns=["Input", "Accepted"])


def split_batch(text):
    """One input per non-empty line, kept exactly as typed."""
    return [line for line in text.splitlines() if line]

# ===================================================================
#  4. VISUALIZATION
# ===================================================================

class Visualizer:
    """Creates a Graphviz state diagram of a DFA."""
    def __init__(self, dfa):
        self.dfa = dfa

    def render(self):
        dot = Digraph(comment='Deterministic Finite Automaton'); dot.attr(rankdir='LR')
        for state in self.dfa.states():
            shape = 'doublecircle' if self.dfa.is_final(state) else 'circle'
            dot.node(state, state, shape=shape)
        if self.dfa.start is not None:
            dot.node('', '', shape='none', width='0', height='0'); dot.edge('', self.dfa.start, label='')
        labels = {}
        for from_state, symbol, to_state in self.dfa.transitions(): labels.setdefault((from_state, to_state), []).append(symbol)
        for (from_state, to_state), symbols in labels.items(): dot.edge(from_state, to_state, label=','.join(symbols))
        return dot
