"""Parsers for the seccomp values given to the spec generator."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SyscallRule:
    """One syscall rule, optionally with an argument comparison.

    ``index``, ``value``, ``value_two`` and ``operator`` are empty when the
    rule names only a syscall.
    """

    action: str
    syscall: str
    index: str = ""
    value: str = ""
    value_two: str = ""
    operator: str = ""

    @property
    def has_comparison(self) -> bool:
        """Whether the rule carries an argument comparison."""
        return bool(self.index or self.value or self.value_two or self.operator)


def parse_seccomp_rules(action: str, text: str) -> list[SyscallRule]:
    """Parse a comma separated list of syscall rules for ``action``.

    Each entry is either ``syscall`` or
    ``syscall:index:value:valueTwo:operator``.
    Raises :class:`ValueError` for an entry of any other shape.
    """
    rules = []
    for entry in text.split(","):
        fields = entry.split(":")
        if len(fields) == 5:
            syscall, index, value, value_two, operator = fields
            rules.append(
                SyscallRule(
                    action=action,
                    syscall=syscall,
                    index=index,
                    value=value,
                    value_two=value_two,
                    operator=operator,
                )
            )
        elif len(fields) == 1:
            rules.append(SyscallRule(action=action, syscall=fields[0]))
        else:
            raise ValueError(f"invalid syscall argument formatting {fields}")
    return rules


def parse_architectures(text: str) -> list[str]:
    """Split a comma separated list of seccomp architectures."""
    return text.split(",")