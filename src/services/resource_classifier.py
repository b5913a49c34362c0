"""
Protocol and source classification for resource files.

Both classifications are ordered decision tables: the first rule whose
predicate matches wins, and each table ends with a catch-all default.
"""

from dataclasses import dataclass
from typing import Callable, Generic, List, Sequence, Tuple, TypeVar

from ..models.core import Protocol, Source

T = TypeVar('T')


@dataclass(frozen=True)
class Rule(Generic[T]):
    """One row of a decision table."""
    name: str
    predicate: Callable[..., bool]  # (folder_path, filename) for protocols, (folder_path) for sources
    result: T


def _under(folder: str) -> Callable[[Sequence[str]], bool]:
    return lambda folder_path: bool(folder_path) and folder_path[0] == folder


def _subfolder_is(name: str) -> Callable[[Sequence[str]], bool]:
    # role/<role-name>/<subfolder>/...
    return lambda folder_path: len(folder_path) >= 3 and folder_path[2] == name


def _role_rule(name: str, result: Protocol, test: Callable[[Sequence[str], str], bool]) -> Rule[Protocol]:
    in_role = _under('role')
    return Rule(name, lambda folder_path, filename: in_role(folder_path) and test(folder_path, filename), result)


def _other_rule(name: str, result: Protocol, needle: str) -> Rule[Protocol]:
    special = (_under('role'), _under('tool'))
    return Rule(name,
                lambda folder_path, filename: not any(p(folder_path) for p in special) and needle in filename,
                result)


PROTOCOL_RULES: List[Rule[Protocol]] = [
    Rule('root-level file', lambda folder_path, filename: not folder_path, 'role'),
    _role_rule('role: .thought. in filename', 'thought', lambda fp, fn: '.thought.' in fn),
    _role_rule('role: .execution. in filename', 'execution', lambda fp, fn: '.execution.' in fn),
    _role_rule('role: .role. in filename', 'role', lambda fp, fn: '.role.' in fn),
    _role_rule('role: thought subfolder', 'thought', lambda fp, fn: _subfolder_is('thought')(fp)),
    _role_rule('role: execution subfolder', 'execution', lambda fp, fn: _subfolder_is('execution')(fp)),
    _role_rule('role: definition file', 'role', lambda fp, fn: True),
    Rule('tool: manual in filename',
         lambda folder_path, filename: _under('tool')(folder_path) and 'manual' in filename,
         'manual'),
    Rule('tool: default', lambda folder_path, filename: _under('tool')(folder_path), 'tool'),
    _other_rule('thought in filename', 'thought', 'thought'),
    _other_rule('execution in filename', 'execution', 'execution'),
    _other_rule('manual in filename', 'manual', 'manual'),
    Rule('default', lambda folder_path, filename: True, 'role'),
]

SOURCE_RULES: List[Rule[Source]] = [
    Rule('system segment', lambda folder_path: 'system' in folder_path, 'system'),
    Rule('user segment', lambda folder_path: 'user' in folder_path, 'user'),
    Rule('default', lambda folder_path: True, 'project'),
]


def _evaluate(rules: Sequence[Rule[T]], *args) -> Tuple[str, T]:
    for rule in rules:
        if rule.predicate(*args):
            return rule.name, rule.result
    raise ValueError('Decision table has no matching rule')


def classify_protocol(folder_path: Sequence[str], filename: str) -> Protocol:
    """Infer a resource's protocol from its root-relative folders and filename.

    Examples:
        (['role', 'architect', 'execution'], 'plan.md') -> 'execution'
        (['role', 'architect'], 'notes.md') -> 'role'
        (['tool', 'web-search'], 'manual.md') -> 'manual'
    """
    return _evaluate(PROTOCOL_RULES, list(folder_path), filename)[1]


def classify_source(folder_path: Sequence[str]) -> Source:
    """Infer provenance: any 'system' segment wins, then 'user', else project."""
    return _evaluate(SOURCE_RULES, list(folder_path))[1]


def explain_protocol(folder_path: Sequence[str], filename: str) -> str:
    """Name the rule that decides the protocol, for debugging classification."""
    return _evaluate(PROTOCOL_RULES, list(folder_path), filename)[0]
