"""Routing — pattern parsing and trie-based matching.

Patterns register into and out of a ``PatternMatcher`` at any time;
scopes publish each change as a new ``MatcherSnapshot``.
"""
