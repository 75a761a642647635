# SPDX-License-Identifier: GPL-3.0-or-later

import json
import time
from typing import Any, Callable, Dict, List, Optional

from github3.exceptions import GitHubError
from github3.repos.repo import Repository

from ghadmin import SecuritySettings
from ghadmin import codeql
from ghadmin.hub import Client, web_url
from ghadmin.run import confirm

ENABLED = 'enabled'


def enable_secret_scanning(ghc: Client, r: Repository) -> bool:
    ghc.update_security(r, SecuritySettings(secret_scanning=ENABLED))
    print(f"  -> Secret scanning (secret protection) enabled for {r.full_name}")
    return True


def enable_push_protection(ghc: Client, r: Repository) -> bool:
    if ghc.security_status(r, 'secret_scanning') != ENABLED:
        print("  -> WARNING: Secret scanning is not enabled. "
              "Push protection requires secret scanning to be enabled first.")
        print(f"  -> Skipping {r.full_name}")
        return False

    ghc.update_security(r, SecuritySettings(secret_scanning_push_protection=ENABLED))
    print(f"  -> Push protection enabled for {r.full_name}")
    return True


def _enable(endpoint: str, what: str, data: Optional[Dict[str, Any]] = None
            ) -> Callable[[Client, Repository], bool]:
    def action(ghc: Client, r: Repository) -> bool:
        if ghc.enable(r, endpoint, data):
            print(f"  -> {what} enabled for {r.full_name}")
            return True
        print(f"  -> ERROR: Failed to enable {what.lower()} for {r.full_name}")
        return False
    return action


enable_dependabot_alerts = _enable('vulnerability-alerts', "Dependabot alerts")
enable_dependabot_security_updates = _enable('automated-security-fixes',
                                             "Dependabot security updates")
enable_private_vulnerability_reporting = _enable('private-vulnerability-reporting',
                                                 "Private vulnerability reporting",
                                                 {'enabled': True})
enable_dependency_graph = _enable('dependency-graph', "Dependency graph", {'enabled': True})


def load_snapshot(path: str) -> Dict[str, Any]:
    with open(path) as f:
        return json.load(f)


def submit_snapshot(snapshot: Dict[str, Any]) -> Callable[[Client, Repository], bool]:
    def action(ghc: Client, r: Repository) -> bool:
        ghc.submit_snapshot(r, snapshot)
        print(f"  -> Snapshot submitted for {r.full_name}")
        return True
    return action


def _step(question: str, prompt: bool, fn: Callable[[], Any], done: str, failed: str
          ) -> Optional[bool]:
    """Run one change, None when the user declined it."""
    if not confirm(question, prompt):
        print(f"  -> Skipped: {question}")
        return None
    try:
        ok = fn()
    except GitHubError as e:
        print(f"  -> {failed}: {e}")
        return False
    if ok is False:
        print(f"  -> {failed}")
        return False
    print(f"  -> {done}")
    return True


def advanced_security(codeql_only: bool = False, private_vuln_reporting: bool = False,
                      prompt: bool = False,
                      sleep: Callable[[float], None] = time.sleep
                      ) -> Callable[[Client, Repository], bool]:
    """Enable everything GitHub Advanced Security has to offer.

    Each step is attempted independently, a failing step (e.g. because
    Advanced Security is not available for the account) does not prevent
    the following ones.
    """
    settings = SecuritySettings(advanced_security=ENABLED, secret_scanning=ENABLED,
                                secret_scanning_push_protection=ENABLED,
                                dependabot_version_updates=ENABLED)

    def action(ghc: Client, r: Repository) -> bool:
        steps: List[Optional[bool]] = []
        if not codeql_only:
            steps.append(_step(
                f"PATCH security_and_analysis of {r.full_name}?", prompt,
                lambda: ghc.update_security(r, settings),
                "security_and_analysis updated (Advanced Security, Secret Scanning, "
                "Push Protection requested)",
                "ERROR: Failed to update security_and_analysis (you may lack admin "
                "access or Advanced Security is not available)"))
            steps.append(_step(
                f"Enable Dependabot security updates for {r.full_name}?", prompt,
                lambda: ghc.enable(r, 'automated-security-fixes'),
                "Dependabot security updates enabled",
                "WARNING: Could not enable Dependabot security updates"))
            steps.append(_step(
                f"Enable vulnerability alerts for {r.full_name}?", prompt,
                lambda: ghc.enable(r, 'vulnerability-alerts'),
                "Vulnerability alerts enabled",
                "WARNING: Could not enable vulnerability alerts"))
            if private_vuln_reporting:
                steps.append(_step(
                    f"Enable private vulnerability reporting for {r.full_name}?", prompt,
                    lambda: ghc.enable(r, 'private-vulnerability-reporting'),
                    "Private vulnerability reporting enabled",
                    "WARNING: Could not enable private vulnerability reporting"))

        result = codeql.SetupResult.SKIPPED
        if confirm(f"Configure CodeQL default setup for {r.full_name}?", prompt):
            result = codeql.configure(ghc, r, sleep=sleep)
        else:
            print("  -> Skipped CodeQL default setup")

        print(f"  -> Security page: {web_url(r.full_name, 'security')}")
        # Declined steps do not count as failures
        return False not in steps and result != codeql.SetupResult.FAILED
    return action
