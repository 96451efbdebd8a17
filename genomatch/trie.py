"""Prefix tree over nucleotide symbols with exact and single-substitution lookup."""

from typing import Any, Dict, Iterator, List, Optional

from .genome import NUCLEOTIDES


class TrieNode:
    __slots__ = ("symbol", "children", "entries")

    def __init__(self, symbol: str = "") -> None:
        self.symbol = symbol
        self.children: Dict[str, "TrieNode"] = {}
        self.entries: List[Any] = []

    def __repr__(self):
        return f"TrieNode({self.symbol!r}, children={tuple(self.children)}, entries={len(self.entries)})"

    def child(self, symbol: str) -> Optional["TrieNode"]:
        node = self.children.get(symbol)
        if node is not None:
            assert node.symbol == symbol, f"Corrupt trie: child {node.symbol!r} stored under {symbol!r}"
        return node


class Trie:
    """Trie keyed by sequence symbols, holding a list of entries per key.

    Interface:
      - insert(key, entry)
      - find_exact(key) -> entries stored under exactly ``key``
      - find_with_one_substitution(key) -> entries stored under any key that
        differs from ``key`` in exactly one position
    """

    def __init__(self, alphabet: str = NUCLEOTIDES) -> None:
        self.root = TrieNode()
        self.alphabet = frozenset(alphabet)
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def insert(self, key: str, entry: Any) -> None:
        if not key:
            return
        node = self.root
        for ch in key:
            nxt = node.child(ch)
            if nxt is None:
                nxt = TrieNode(ch)
                node.children[ch] = nxt
            node = nxt
        node.entries.append(entry)
        self._size += 1

    def find_exact(self, key: str) -> List[Any]:
        if not key:
            return []
        node = self.root
        for ch in key:
            node = node.child(ch)
            if node is None:
                return []
        return list(node.entries)

    def find_with_one_substitution(self, key: str) -> List[Any]:
        """Return entries reachable by changing exactly one symbol of ``key``.

        The substituted symbol must come from the trie's alphabet. The
        unchanged key is not included; combine with :meth:`find_exact` for
        "at most one" semantics.
        """
        if not key:
            return []
        results: List[Any] = []

        def dfs(node: TrieNode, pos: int, substituted: bool) -> None:
            if pos == len(key):
                if substituted:
                    results.extend(node.entries)
                return

            target_ch = key[pos]
            if substituted:
                # budget spent, the rest of the path must match exactly
                nxt = node.child(target_ch)
                if nxt is not None:
                    dfs(nxt, pos + 1, True)
                return

            for ch in node.children:
                child = node.child(ch)
                if ch == target_ch:
                    dfs(child, pos + 1, False)
                elif ch in self.alphabet:
                    dfs(child, pos + 1, True)

        dfs(self.root, 0, False)
        return results

    def find(self, key: str, exact_match_only: bool) -> List[Any]:
        """Entries under ``key``, plus one-substitution neighbours unless exact_match_only."""
        results = self.find_exact(key)
        if not exact_match_only:
            results.extend(self.find_with_one_substitution(key))
        return results

    def iter_nodes(self) -> Iterator[TrieNode]:
        """Iterate over all non-root nodes, depth first."""
        stack = list(self.root.children.values())
        while stack:
            node = stack.pop()
            yield node
            stack.extend(node.children.values())

    def node_count(self) -> int:
        return sum(1 for _ in self.iter_nodes())
