import pytest

from ocitools.seccompargs import SyscallRule, parse_architectures, parse_seccomp_rules


def test_single_syscall():
    rules = parse_seccomp_rules("errno", "getcwd")
    assert rules == [SyscallRule(action="errno", syscall="getcwd")]
    assert not rules[0].has_comparison


def test_full_comparison():
    rules = parse_seccomp_rules("kill", "clone:0:2080505856:0:SCMP_CMP_MASKED_EQ")
    assert len(rules) == 1
    rule = rules[0]
    assert rule.action == "kill"
    assert rule.syscall == "clone"
    assert rule.index == "0"
    assert rule.value == "2080505856"
    assert rule.value_two == "0"
    assert rule.operator == "SCMP_CMP_MASKED_EQ"
    assert rule.has_comparison


def test_several_entries_keep_order():
    rules = parse_seccomp_rules("trap", "read,write:1:2:3:SCMP_CMP_EQ,open")
    assert [rule.syscall for rule in rules] == ["read", "write", "open"]
    assert all(rule.action == "trap" for rule in rules)
    assert rules[1].operator == "SCMP_CMP_EQ"
    assert rules[2].index == ""


@pytest.mark.parametrize("text", ["read:1", "read:1:2", "read:1:2:3", "a:b:c:d:e:f"])
def test_bad_shape(text):
    with pytest.raises(ValueError, match="invalid syscall argument formatting"):
        parse_seccomp_rules("allow", text)


def test_error_after_valid_entry():
    with pytest.raises(ValueError):
        parse_seccomp_rules("allow", "read,write:1")


def test_architectures():
    assert parse_architectures("amd64,x86") == ["amd64", "x86"]
    assert parse_architectures("arm") == ["arm"]