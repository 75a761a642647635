#!/usr/bin/env python3
# SPDX-License-Identifier: GPL-3.0-or-later

import argparse
import os
import sys
from typing import List, Optional

from ghadmin import branches, codeql, files, rulesets, security
from ghadmin.hub import AuthenticationError, Client, create_client
from ghadmin.run import each
from ghadmin.targets import NoRepositoriesError, resolve


def _env_flag(name: str) -> bool:
    # Same semantics as the shell scripts: only "true" enables it
    return os.environ.get(name, 'false') == 'true'


def _setup_ruleset_branches(args):
    def action(ghc: Client, r) -> bool:
        branches.ensure_branch(ghc, r, args.branch)
        return rulesets.replace(ghc, r, rulesets.protect_default_branch())
    return action


def _copilot_code_review(args):
    def action(ghc: Client, r) -> bool:
        rulesets.check_copilot(ghc, r)
        return rulesets.replace(ghc, r, rulesets.copilot_code_review())
    return action


# name: (help, requires explicit repositories, skip archived, action factory)
COMMANDS = {
    'setup-dev-branches': (
        "Create the development branch from the default branch where missing",
        False, False, lambda args: lambda ghc, r: branches.ensure_branch(ghc, r, args.branch)),
    'delete-rulesets': (
        "Delete ALL rulesets of the repositories",
        False, False, lambda args: rulesets.delete_all),
    'setup-rulesets': (
        "Replace the default branch protection ruleset",
        False, False, lambda args: lambda ghc, r: rulesets.replace(
            ghc, r, rulesets.protect_default_branch())),
    'setup-ruleset-branches': (
        "Create the development branch and replace the protection ruleset",
        False, False, _setup_ruleset_branches),
    'copilot-code-review': (
        "Replace the Copilot code review ruleset",
        False, True, _copilot_code_review),
    'advanced-security': (
        "Enable Advanced Security, secret scanning, Dependabot and CodeQL default setup",
        True, True, lambda args: security.advanced_security(
            args.codeql_only, args.private_vuln_reporting, args.prompt)),
    'disable-codeql': (
        "Disable CodeQL default setup (and optionally remove the CodeQL workflow)",
        True, True, lambda args: lambda ghc, r: codeql.disable(
            ghc, r, args.delete_workflow, args.prompt)),
    'repo-files': (
        "Create/update Dependabot, CodeQL and Renovate files in the repositories",
        True, True, lambda args: files.prepare(prompt=args.prompt)),
    'enable-secret-scanning': (
        "Enable secret scanning", True, True, lambda args: security.enable_secret_scanning),
    'enable-push-protection': (
        "Enable secret scanning push protection",
        True, True, lambda args: security.enable_push_protection),
    'enable-dependabot-alerts': (
        "Enable Dependabot alerts", True, True, lambda args: security.enable_dependabot_alerts),
    'enable-dependabot-security-updates': (
        "Enable Dependabot security updates",
        True, True, lambda args: security.enable_dependabot_security_updates),
    'enable-private-vuln-reporting': (
        "Enable private vulnerability reporting",
        True, True, lambda args: security.enable_private_vulnerability_reporting),
    'enable-dependency-graph': (
        "Enable the dependency graph", True, True, lambda args: security.enable_dependency_graph),
    'submit-snapshot': (
        "Submit a dependency snapshot",
        True, True, lambda args: security.submit_snapshot(args.snapshot_data)),
}


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--owner', default=os.environ.get('OWNER', 'username'),
                        help="GitHub user or organization (OWNER)")
    common.add_argument('--repos', default=os.environ.get('REPOS', ''),
                        help="Comma separated repositories, 'repo' or 'owner/repo' (REPOS)")
    common.add_argument('--include-private', action='store_true',
                        default=_env_flag('INCLUDE_PRIVATE_REPOS'),
                        help="Include private repositories when fetching (INCLUDE_PRIVATE_REPOS)")
    common.add_argument('--all', dest='fetch_all', action='store_true',
                        default=_env_flag('FETCH_ALL_PUBLIC_REPOS'),
                        help="Fetch all repositories of the owner (FETCH_ALL_PUBLIC_REPOS)")
    common.add_argument('--prompt', action='store_true', default=_env_flag('PROMPT_BEFORE_API'),
                        help="Ask before each change (PROMPT_BEFORE_API)")
    common.add_argument('--token', default=None,
                        help="GitHub token (default: GITHUB_TOKEN, GH_TOKEN or 'gh auth token')")

    parser = argparse.ArgumentParser(description="Administrate GitHub repositories in bulk")
    sub = parser.add_subparsers(dest='command', metavar='command', required=True)
    for name, (help_text, *_) in COMMANDS.items():
        p = sub.add_parser(name, parents=[common], help=help_text, description=help_text)
        if name in ('setup-dev-branches', 'setup-ruleset-branches'):
            p.add_argument('--branch', default=os.environ.get('DEV_BRANCH', branches.DEFAULT_BRANCH),
                           help="Development branch to create (DEV_BRANCH)")
        elif name == 'advanced-security':
            p.add_argument('--codeql-only', action='store_true', default=_env_flag('CODEQL_ONLY'),
                           help="Only configure CodeQL default setup (CODEQL_ONLY)")
            p.add_argument('--private-vuln-reporting', action='store_true',
                           default=_env_flag('ENABLE_PRIVATE_VULN_REPORTING'),
                           help="Enable private vulnerability reporting as well")
        elif name == 'disable-codeql':
            p.add_argument('--delete-workflow', action='store_true',
                           default=_env_flag('DELETE_CODEQL_WORKFLOW'),
                           help=f"Delete {codeql.WORKFLOW_PATH} (DELETE_CODEQL_WORKFLOW)")
        elif name == 'submit-snapshot':
            p.add_argument('--snapshot', default=os.environ.get('SNAPSHOT_FILE'),
                           help="Path to the dependency snapshot JSON (SNAPSHOT_FILE)")
    return parser


def main(argv: Optional[List[str]] = None, ghc: Optional[Client] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _, require_explicit, skip_archived, factory = COMMANDS[args.command]

    if args.command == 'submit-snapshot':
        if not args.snapshot:
            parser.error("No snapshot file specified, use --snapshot (or SNAPSHOT_FILE)")
        if not os.path.isfile(args.snapshot):
            parser.error(f"Snapshot file not found: {args.snapshot}")
        try:
            args.snapshot_data = security.load_snapshot(args.snapshot)
        except ValueError as e:
            parser.error(f"Invalid snapshot file {args.snapshot}: {e}")

    if ghc is None:
        try:
            ghc = create_client(args.token)
        except AuthenticationError as e:
            print(f"ERROR: {e}")
            return 1

    try:
        repos = resolve(ghc, args.owner, args.repos, args.include_private, args.fetch_all,
                        require_explicit)
    except NoRepositoriesError as e:
        parser.error(str(e))

    print(f"Found {len(repos)} repositories to process.")
    if args.command == 'delete-rulesets':
        print("WARNING: This will DELETE ALL rulesets in these repositories!")
    elif args.command == 'setup-ruleset-branches':
        print(f"Your GitHub user ID: {ghc.me().id}")

    count = each(ghc, repos, factory(args), skip_archived)

    if args.command == 'repo-files':
        files.enable_org_dependency_submission(ghc, args.owner, args.prompt)

    print(f"Done. {args.command} succeeded for {count} of {len(repos)} repositories.")
    return 0


if __name__ == '__main__':
    sys.exit(main())
