"""
Pytest configuration and fixtures for the DFA tests.

Provides the small automata shared by the core and interpreter tests.
"""

import pytest

from automaton import DFA


@pytest.fixture
def parity_dfa():
    """
    Two-state DFA over {0,1} accepting strings with an odd number of 1s.

    A is the start state, B the only final state.
    """
    dfa = DFA()
    dfa.add_sigma('0'); dfa.add_sigma('1')
    dfa.add_state('A'); dfa.add_state('B')
    dfa.set_start('A'); dfa.set_final('B')
    dfa.add_transition('A', 'A', '0'); dfa.add_transition('A', 'B', '1')
    dfa.add_transition('B', 'B', '0'); dfa.add_transition('B', 'A', '1')
    return dfa


@pytest.fixture
def div3_definition():
    """Definition text for binary numbers divisible by three."""
    return """
# multiples of three
states: q0, q1, q2
alphabet: 0, 1
start: q0
final: q0
transitions:
(q0,0)->q0
(q0,1)->q1
(q1,0)->q2
(q1,1)->q0
(q2,0)->q1
(q2,1)->q2
end
"""
