from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from coursereqs.schemas.requirements import THROWAWAY, Requirement, is_throwaway


def trim(text: str) -> str:
    return text.strip(" \t\n\r")


def group_tag(index: int) -> str:
    return f"@{index}"


def group_parens(text: str) -> Tuple[str, List[str]]:
    """
    Pull every parenthesized span out of ``text``.

    Each span is replaced by a ``@N`` tag, where N indexes the returned group
    list. A ``)`` always closes the most recent open ``(``, so groups come out
    innermost first; unmatched ``)`` are left alone.
    """
    groups: List[str] = []
    stack: List[int] = []
    pos = 0
    while pos < len(text):
        char = text[pos]
        if char == "(":
            stack.append(pos)
        elif char == ")" and stack:
            start = stack.pop()
            inner = text[start + 1:pos]
            tag = group_tag(len(groups))
            groups.append(inner)
            text = text.replace(text[start:pos + 1], tag)
            # resume right after the tag
            pos += len(tag) - len(inner) - 2
        pos += 1
    return text, groups


def ungroup_text(text: str, groups: List[str], base: int | None = None) -> str:
    """
    Replace group tags with their original text. Groups below ``base`` came
    from parentheses and get them back; synthesized groups are spliced in bare.
    """
    if base is None:
        base = len(groups)
    text = trim(text)
    # highest first: later groups can sit inside earlier ones, and @1 must not eat @10
    for index in range(len(groups) - 1, -1, -1):
        raw = groups[index]
        text = text.replace(group_tag(index), f"({raw})" if index < base else raw)
    return text


@dataclass
class Arena:
    """
    Per-chunk store of raw groups and their parsed requirements.

    ``groups[:base]`` come from the parenthesis scan; their results are kept in
    ``results`` in parse order with throwaways left out, so a tag refers to the
    N-th surviving result. Groups synthesized by substitution matchers are
    appended after ``base`` and their results are addressed by that index.
    """
    groups: List[str] = field(default_factory=list)
    results: List[Requirement] = field(default_factory=list)
    synthesized: Dict[int, Requirement] = field(default_factory=dict)
    base: int = 0

    @classmethod
    def from_groups(cls, groups: List[str]) -> "Arena":
        return cls(groups=list(groups), base=len(groups))

    def push(self, req: Requirement) -> None:
        if not is_throwaway(req):
            self.results.append(req)

    def lookup(self, index: int) -> Requirement:
        if index >= self.base:
            return self.synthesized.get(index, THROWAWAY)
        if 0 <= index < len(self.results):
            return self.results[index]
        return THROWAWAY

    def substitute(self, text: str, subtext: str, req: Requirement) -> str:
        """Swap ``subtext`` for a fresh tag bound to ``req``; returns the new text."""
        index = len(self.groups)
        self.groups.append(subtext)
        self.synthesized[index] = req
        return text.replace(subtext, group_tag(index))

    def ungroup(self, text: str) -> str:
        return ungroup_text(text, self.groups, self.base)
