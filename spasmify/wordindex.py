from typing import Dict, Iterator, List, Optional, Tuple


class WordIndex:
    """word -> {source -> count} table built while reading the inputs.

    Dimension numbers are positions in the sorted word list, so they only
    stay fixed once recording is over.
    """

    def __init__(self):
        self._words: Dict[str, Dict[str, int]] = {}
        self._sorted: Optional[List[str]] = None

    def record(self, word: str, source: str) -> int:
        per_source = self._words.get(word)
        if per_source is None:
            per_source = self._words[word] = {}
            self._sorted = None
        n = per_source.get(source, 0) + 1
        per_source[source] = n
        return n

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: str) -> bool:
        return word in self._words

    def _ordered(self) -> List[str]:
        if self._sorted is None:
            self._sorted = sorted(self._words)
        return self._sorted

    def words(self) -> List[str]:
        return list(self._ordered())

    def dimensions(self) -> Iterator[Tuple[int, str]]:
        return enumerate(self._ordered())

    def count(self, word: str, source: str) -> int:
        return self._words.get(word, {}).get(source, 0)

    def total(self, word: str) -> int:
        return sum(self._words.get(word, {}).values())

    def sources(self, word: str) -> List[str]:
        return sorted(self._words.get(word, {}))

    def vector(self, source: str) -> Iterator[Tuple[int, int]]:
        for dim, word in self.dimensions():
            n = self._words[word].get(source)
            if n:
                yield dim, n
