# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class RepositoryRef:
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def parse(cls, value: str, owner: str) -> 'RepositoryRef':
        if '/' in value:
            o, n = value.split('/', 1)
            return cls(o, n)
        return cls(owner, value)

    def __str__(self) -> str:
        return self.full_name


@dataclass
class BypassActor:
    actor_id: int = 5  # Repository admin role
    actor_type: str = 'RepositoryRole'
    bypass_mode: str = 'always'


@dataclass
class Rule:
    type: str
    parameters: Optional[Dict[str, Any]] = None

    def as_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {'type': self.type}
        if self.parameters is not None:
            d['parameters'] = self.parameters
        return d


@dataclass
class Ruleset:
    name: str
    rules: List[Rule]
    bypass_actors: List[BypassActor] = field(default_factory=lambda: [BypassActor()])
    include: List[str] = field(default_factory=lambda: ['~DEFAULT_BRANCH'])
    exclude: List[str] = field(default_factory=list)
    target: str = 'branch'
    enforcement: str = 'active'

    def as_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'target': self.target,
            'enforcement': self.enforcement,
            'conditions': {
                'ref_name': {'include': self.include, 'exclude': self.exclude},
            },
            'bypass_actors': [vars(a) for a in self.bypass_actors],
            'rules': [r.as_dict() for r in self.rules],
        }


@dataclass
class SecuritySettings:
    advanced_security: Optional[str] = None
    secret_scanning: Optional[str] = None
    secret_scanning_push_protection: Optional[str] = None
    dependabot_version_updates: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        # Only send what was requested, GitHub merges the rest
        return {'security_and_analysis': {k: {'status': v} for k, v in vars(self).items()
                                          if v is not None}}


@dataclass
class RepoFile:
    path: str
    content: str
    # Used in the commit messages, e.g. "chore: add CodeQL workflow"
    title: str
