from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Set


class Transition(NamedTuple):
    """A single labelled edge: (source, symbol, target)."""
    source: str
    symbol: str
    target: str


class InputPath(NamedTuple):
    path: List[Transition]
    accepted: bool


def add_new_state(states: Set[str], prefix: str = 'q') -> str:
    """
    Mint a state name that is not yet in ``states``.

    Probes ``prefix0``, ``prefix1``, ... until an unused name is found. The
    name is added to ``states`` in place before it is returned.

    Args:
        states: The caller's set of existing state names
        prefix: Prefix of the generated name

    Returns:
        str: The newly added state name
    """
    counter = 0
    candidate = f"{prefix}{counter}"
    while candidate in states:
        counter += 1
        candidate = f"{prefix}{counter}"
    states.add(candidate)
    return candidate


class Automaton:
    """
    Generic finite automaton: states, alphabet, start state, accepting states
    and an ordered list of transitions.

    The automaton does not check that ``start``, ``accept`` or transition
    endpoints refer to known states; see ``fsa_properties.validate_fsa_structure``.
    """

    def __init__(self, states: Iterable[str], alphabet: Iterable[str], start: str,
                 accept: Iterable[str], transitions: Iterable[Iterable[str]]):
        self.states = list(states)
        self.alphabet = list(alphabet)
        self.start = start
        self.accept = list(accept)
        self.transitions = [Transition(*t) for t in transitions]

    def __repr__(self):
        return "<{} states={} start={!r} accept={}>".format(
            self.__class__.__name__, self.states, self.start, self.accept)

    def __eq__(self, other):
        if not isinstance(other, Automaton):
            return NotImplemented
        return (self.states == other.states
                and self.alphabet == other.alphabet
                and self.start == other.start
                and self.accept == other.accept
                and self.transitions == other.transitions)

    def add_state(self, state: str) -> None:
        if state not in self.states:
            self.states.append(state)

    def remove_state(self, state: str) -> None:
        """Remove a state together with its accepting flag and every transition touching it."""
        self.states = [s for s in self.states if s != state]
        self.accept = [s for s in self.accept if s != state]
        if self.start == state:
            self.start = self.states[0] if self.states else ''
        self.transitions = [t for t in self.transitions
                            if t.source != state and t.target != state]

    def has_state(self, state: str) -> bool:
        return state in self.states

    def is_accepting(self, state: str) -> bool:
        return state in self.accept

    def get_transitions_from(self, state: str) -> List[Transition]:
        return [t for t in self.transitions if t.source == state]

    def find_transition(self, state: str, symbol: str) -> Optional[Transition]:
        """First transition leaving ``state`` on ``symbol``, or None."""
        for t in self.transitions:
            if t.source == state and t.symbol == symbol:
                return t
        return None

    def is_deterministic(self) -> bool:
        """
        Checks that no (state, symbol) pair has more than one transition.

        Returns:
            bool: True if the automaton is deterministic, False otherwise
        """
        seen = set()
        for t in self.transitions:
            key = (t.source, t.symbol)
            if key in seen:
                return False
            seen.add(key)
        return True

    def is_complete(self) -> bool:
        """
        Checks that every state has at least one transition for every symbol.

        Returns:
            bool: True if the automaton is complete, False otherwise
        """
        for state in self.states:
            for symbol in self.alphabet:
                if self.find_transition(state, symbol) is None:
                    return False
        return True

    def iter_transitions(self) -> Iterator[Transition]:
        for t in self.transitions:
            yield t

    def get_input_path(self, word: Iterable[str]) -> InputPath:
        """
        Trace the transitions taken while reading ``word`` from the start state.

        Reading stops at the first symbol without a transition; the path
        collected so far is returned as rejected.

        Args:
            word: The input, one symbol per character

        Returns:
            InputPath: The transitions taken and whether the word is accepted
        """
        current = self.start
        path = []
        for symbol in word:
            t = self.find_transition(current, symbol)
            if t is None:
                return InputPath(path, False)
            path.append(t)
            current = t.target
        return InputPath(path, self.is_accepting(current))

    def copy(self) -> 'Automaton':
        return Automaton(self.states, self.alphabet, self.start, self.accept, self.transitions)

    @classmethod
    def from_dict(cls, fsa: Dict) -> 'Automaton':
        """
        Build an automaton from its JSON representation.

        Args:
            fsa: A dictionary with the following keys:
                - states: List of all states
                - alphabet: List of symbols in the alphabet
                - transitions: Either a nested mapping ``{state: {symbol: [targets]}}``
                  or a list of ``{'from', 'symbol', 'to'}`` records
                - startingState: The starting state
                - acceptingStates: List of accepting states

        Returns:
            Automaton: The automaton described by ``fsa``

        Raises:
            ValueError: If a key is missing or a transition record is malformed
        """
        for key in ('states', 'alphabet', 'startingState', 'acceptingStates'):
            if key not in fsa:
                raise ValueError(f"Missing required key: {key}")

        raw = fsa.get('transitions') or {}
        transitions = []
        if isinstance(raw, dict):
            for source, by_symbol in raw.items():
                for symbol, targets in by_symbol.items():
                    if isinstance(targets, str):
                        targets = [targets]
                    for target in targets:
                        transitions.append(Transition(source, symbol, target))
        elif isinstance(raw, list):
            for record in raw:
                try:
                    transitions.append(Transition(record['from'], record['symbol'], record['to']))
                except (KeyError, TypeError):
                    raise ValueError(f"Malformed transition record: {record!r}")
        else:
            raise ValueError("transitions must be a dictionary or a list")

        return cls(fsa['states'], fsa['alphabet'], fsa['startingState'] or '',
                   fsa['acceptingStates'], transitions)

    def to_dict(self) -> Dict:
        """Nested-mapping JSON representation, transitions grouped by source then symbol."""
        transitions = {}
        for t in self.transitions:
            transitions.setdefault(t.source, {}).setdefault(t.symbol, []).append(t.target)
        return {
            'states': self.states[:],
            'alphabet': self.alphabet[:],
            'transitions': transitions,
            'startingState': self.start,
            'acceptingStates': self.accept[:]
        }
