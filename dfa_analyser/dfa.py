import logging
import random
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Dict, Iterable, Iterator, Optional, Set

from .fsa_model import Automaton, Transition, add_new_state

logger = logging.getLogger(__name__)

# Longest word length (exclusive) that cardinality() enumerates.
CARDINALITY_LENGTH_LIMIT = 20


class AlphabetMismatch(ValueError):
    """Raised when two automata that must share an alphabet do not."""


class Recogniser(ABC):
    """Something that holds an automaton and decides membership of words."""

    def __init__(self, automaton: Automaton):
        self.automaton = automaton

    @abstractmethod
    def run_word(self, word: Iterable[str]) -> bool:
        raise NotImplementedError("abstract method")


class DFA(Recogniser):
    """
    Deterministic finite automaton built on top of an ``Automaton``.

    A missing transition is an implicit rejection. Every query below is a
    read-only traversal of the wrapped automaton.
    """

    def __repr__(self):
        return "<{} {!r}>".format(self.__class__.__name__, self.automaton)

    @classmethod
    def from_dict(cls, fsa: Dict) -> 'DFA':
        return cls(Automaton.from_dict(fsa))

    @classmethod
    def from_definition(cls, definition: str) -> 'DFA':
        from .definition import parse_definition
        return cls(parse_definition(definition))

    def _step(self, state: str, symbol: str) -> Optional[str]:
        t = self.automaton.find_transition(state, symbol)
        return t.target if t is not None else None

    def run_word(self, word: Iterable[str]) -> bool:
        current = self.automaton.start
        for symbol in word:
            current = self._step(current, symbol)
            if current is None:
                return False
        return self.automaton.is_accepting(current)

    def _product_search(self, other: 'DFA', is_witness: Callable[[str, str], bool]) -> bool:
        """
        Breadth-first search over reachable state pairs of ``self`` and ``other``.

        Symbols for which either automaton has no transition are not followed,
        so the search only covers words both automata can read completely.

        Returns:
            bool: True if a pair satisfying ``is_witness`` is reachable
        """
        queue = deque([(self.automaton.start, other.automaton.start)])
        visited = set()
        while queue:
            pair = queue.popleft()
            if pair in visited:
                continue
            visited.add(pair)
            s1, s2 = pair
            if is_witness(s1, s2):
                return True
            for symbol in self.automaton.alphabet:
                t1 = self._step(s1, symbol)
                t2 = other._step(s2, symbol)
                if t1 is not None and t2 is not None:
                    queue.append((t1, t2))
        return False

    def issubset(self, other: 'DFA') -> bool:
        """
        Returns True if every word accepted by this DFA is accepted by ``other``.

        The answer is exact when ``other`` is complete. Otherwise words that
        ``other`` cannot read to the end are not examined; use ``complete()``
        on ``other`` first to rule that out.

        Raises:
            AlphabetMismatch: If the two alphabets are not the same set
        """
        mine, theirs = self.automaton.alphabet, other.automaton.alphabet
        if set(mine) != set(theirs):
            raise AlphabetMismatch("Alphabets must match for subset check")

        return not self._product_search(
            other,
            lambda s1, s2: self.automaton.is_accepting(s1) and not other.automaton.is_accepting(s2))

    def issuperset(self, other: 'DFA') -> bool:
        return other.issubset(self)

    def isdisjoint(self, other: 'DFA') -> bool:
        """Returns True if no word is accepted by both automata."""
        return not self._product_search(
            other,
            lambda s1, s2: self.automaton.is_accepting(s1) and other.automaton.is_accepting(s2))

    def reachable_states(self) -> Set[str]:
        """States reachable from the start state through any transition."""
        start = self.automaton.start
        reachable = {start}
        queue = deque([start])
        while queue:
            state = queue.popleft()
            for t in self.automaton.get_transitions_from(state):
                if t.target not in reachable:
                    reachable.add(t.target)
                    queue.append(t.target)
        return reachable

    def isempty(self) -> bool:
        return not any(self.automaton.is_accepting(s) for s in self.reachable_states())

    def isfinite(self) -> bool:
        """
        Returns True unless a depth-first search from the start state finds a
        back-edge into an accepting state.

        A back-edge into an accepting state means that state can be revisited
        indefinitely, so infinitely many words are accepted.
        """
        automaton = self.automaton
        start = automaton.start
        visited = {start}
        on_stack = {start}
        stack = [(start, iter(automaton.get_transitions_from(start)))]

        while stack:
            state, edges = stack[-1]
            for t in edges:
                if t.target not in visited:
                    visited.add(t.target)
                    on_stack.add(t.target)
                    stack.append((t.target, iter(automaton.get_transitions_from(t.target))))
                    break
                if t.target in on_stack and automaton.is_accepting(t.target):
                    return False
            else:
                stack.pop()
                on_stack.discard(state)

        return True

    def words_of_length(self, k: int) -> Iterator[str]:
        """
        Generate every accepted word of exactly ``k`` symbols.

        Words are explored breadth-first, one symbol per layer and in alphabet
        order, without merging paths that reach the same state. The number of
        candidates grows as ``len(alphabet) ** k``.

        Raises:
            ValueError: If ``k`` is negative
        """
        if k < 0:
            raise ValueError("Word length must be non-negative")

        queue = deque([(self.automaton.start, '')])
        while queue:
            state, word = queue.popleft()
            if len(word) == k:
                if self.automaton.is_accepting(state):
                    yield word
                continue
            for symbol in self.automaton.alphabet:
                target = self._step(state, symbol)
                if target is not None:
                    queue.append((target, word + symbol))

    def random_word(self, k: int, rng: Optional[random.Random] = None) -> Optional[str]:
        """
        Pick one accepted word of length ``k`` uniformly at random.

        Args:
            k: Word length
            rng: Source of randomness; the ``random`` module is used if omitted

        Returns:
            Optional[str]: A word, or None if no word of length ``k`` is accepted
        """
        words = list(self.words_of_length(k))
        if not words:
            return None
        return (rng or random).choice(words)

    def cardinality(self, limit: int = CARDINALITY_LENGTH_LIMIT) -> Optional[int]:
        """
        Number of accepted words, or None if the language is infinite.

        Only words shorter than ``limit`` are counted; a finite language with
        longer words is undercounted.
        """
        if not self.isfinite():
            return None
        logger.debug("Counting accepted words of length 0 to %d", limit - 1)
        return sum(sum(1 for _ in self.words_of_length(k)) for k in range(limit))

    def _shortest_distances(self) -> Dict[str, int]:
        start = self.automaton.start
        distances = {start: 0}
        queue = deque([start])
        while queue:
            state = queue.popleft()
            for t in self.automaton.get_transitions_from(state):
                if t.target not in distances:
                    distances[t.target] = distances[state] + 1
                    queue.append(t.target)
        return distances

    def minimum_word_length(self) -> Optional[int]:
        """Length of the shortest accepted word, or None if nothing is accepted."""
        lengths = [d for s, d in self._shortest_distances().items() if self.automaton.is_accepting(s)]
        return min(lengths) if lengths else None

    def maximum_word_length(self) -> Optional[int]:
        """
        Largest shortest-distance from the start state to any reachable
        accepting state.

        This equals the longest accepted word only when no accepting state
        can also be reached by a longer path. Returns None when the language
        is infinite or no accepting state is reachable.
        """
        if not self.isfinite():
            return None
        lengths = [d for s, d in self._shortest_distances().items() if self.automaton.is_accepting(s)]
        return max(lengths) if lengths else None

    def complete(self, prefix: str = 'dead') -> 'DFA':
        """
        Return a complete copy of this DFA.

        Every missing (state, symbol) transition is sent to a new
        non-accepting trap state that loops to itself on every symbol. If
        nothing is missing the copy is returned unchanged.

        Args:
            prefix: Prefix for the trap state's generated name

        Returns:
            DFA: A new DFA; this one is left untouched
        """
        automaton = self.automaton.copy()
        missing = [(state, symbol) for state in automaton.states for symbol in automaton.alphabet
                   if automaton.find_transition(state, symbol) is None]
        if not missing:
            return DFA(automaton)

        dead_state = add_new_state(set(automaton.states), prefix)
        automaton.add_state(dead_state)
        for state, symbol in missing:
            automaton.transitions.append(Transition(state, symbol, dead_state))
        for symbol in automaton.alphabet:
            automaton.transitions.append(Transition(dead_state, symbol, dead_state))

        logger.debug("Added trap state %s for %d missing transitions", dead_state, len(missing))
        return DFA(automaton)
