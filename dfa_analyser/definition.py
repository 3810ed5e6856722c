from typing import List

from .fsa_model import Automaton, Transition


class DefinitionError(ValueError):
    """Raised for a definition line that cannot be parsed."""

    def __init__(self, message: str, line_number: int):
        super().__init__(f"Line {line_number}: {message}")
        self.line_number = line_number


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(',') if item.strip()]


def parse_definition(definition: str) -> Automaton:
    """
    Parse the line-oriented automaton definition format.

    Example::

        states: q0, q1
        alphabet: a, b
        start: q0
        accept: q1
        transitions:
        q0,a->q1
        q1,b->q0

    Blank lines are ignored. Sections that are missing give empty lists and
    an empty start state.

    Args:
        definition: The definition text

    Returns:
        Automaton: The automaton described by the text

    Raises:
        DefinitionError: If a transition line is malformed
    """
    states, alphabet, accept = [], [], []
    start = ''
    transitions = []
    in_transitions = False

    for line_number, raw_line in enumerate(definition.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue

        if line.startswith('transitions:'):
            in_transitions = True
            continue

        if line.startswith('states:'):
            states = _split_list(line.split(':', 1)[1])
        elif line.startswith('alphabet:'):
            alphabet = _split_list(line.split(':', 1)[1])
        elif line.startswith('start:'):
            start = line.split(':', 1)[1].strip()
        elif line.startswith('accept:'):
            accept = _split_list(line.split(':', 1)[1])
        elif in_transitions and '->' in line:
            left, target = (part.strip() for part in line.split('->', 1))
            parts = [part.strip() for part in left.split(',')]
            if len(parts) != 2 or not all(parts) or not target:
                raise DefinitionError(f"Expected 'from,symbol->to', got '{line}'", line_number)
            transitions.append(Transition(parts[0], parts[1], target))

    return Automaton(states, alphabet, start, accept, transitions)


def format_definition(automaton: Automaton) -> str:
    """Render an automaton in the format read by ``parse_definition``."""
    lines = [
        f"states: {', '.join(automaton.states)}",
        f"alphabet: {', '.join(automaton.alphabet)}",
        f"start: {automaton.start}",
        f"accept: {', '.join(automaton.accept)}",
        "transitions:",
    ]
    lines.extend(f"{t.source},{t.symbol}->{t.target}" for t in automaton.iter_transitions())
    return '\n'.join(lines) + '\n'
