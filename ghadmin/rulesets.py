# SPDX-License-Identifier: GPL-3.0-or-later

from typing import Optional

from github3.exceptions import GitHubError
from github3.repos.repo import Repository

from ghadmin import Rule, Ruleset
from ghadmin.hub import Client, web_url


def protect_default_branch() -> Ruleset:
    return Ruleset('protect-default-branch', [
        Rule('deletion'),
        Rule('non_fast_forward'),
        Rule('pull_request', {
            'dismiss_stale_reviews_on_push': True,
            'require_code_owner_review': True,
            'require_last_push_approval': False,
            'required_approving_review_count': 0,
            'required_review_thread_resolution': False,
        }),
    ])


def copilot_code_review() -> Ruleset:
    return Ruleset('copilot-code-review-default', [
        Rule('code_review_by_copilot', {
            'require_code_review_by_copilot': True,
            'dismiss_stale_reviews_on_push': True,
            'require_review_thread_resolution': True,
        }),
    ])


def find(ghc: Client, r: Repository, name: str) -> Optional[int]:
    for rs in ghc.rulesets(r):
        if rs.get('name') == name:
            return rs['id']
    return None


def delete_all(ghc: Client, r: Repository) -> bool:
    ids = [rs['id'] for rs in ghc.rulesets(r) if rs.get('id') is not None]
    if not ids:
        print("  -> No rulesets found.")
        return True

    ok = True
    for ruleset_id in ids:
        print(f"  -> Deleting ruleset ID: {ruleset_id}")
        try:
            deleted = ghc.delete_ruleset(r, ruleset_id)
        except GitHubError as e:
            print(f"  -> ERROR: {e}")
            deleted = False

        if deleted:
            print(f"  -> SUCCESS: Ruleset {ruleset_id} deleted.")
        else:
            print(f"  -> ERROR: Failed to delete ruleset {ruleset_id}. Skipping.")
            ok = False
    return ok


def replace(ghc: Client, r: Repository, ruleset: Ruleset) -> bool:
    existing = find(ghc, r, ruleset.name)
    if existing is not None:
        print(f"  -> Found existing ruleset (ID: {existing}). Deleting...")
        try:
            if not ghc.delete_ruleset(r, existing):
                print("  -> WARNING: Existing ruleset disappeared before it could be deleted")
        except GitHubError as e:
            print(f"  -> WARNING: Failed to delete existing ruleset ({e}). "
                  "Proceeding with new creation.")

    try:
        created = ghc.create_ruleset(r, ruleset)
    except GitHubError as e:
        print(f"  -> ERROR: Failed to create ruleset {ruleset.name} "
              f"(validation error likely): {e}")
        return False

    print(f"  -> Ruleset {ruleset.name} created (ID: {created.get('id')})")
    print("  -> Repository admins can bypass these rules")
    print(f"  -> Repo Settings: {web_url(r.full_name, 'settings', 'rules')}")
    return True


def check_copilot(ghc: Client, r: Repository):
    # Copilot code review needs a Copilot business/enterprise plan
    # on the organization, this can not be queried reliably.
    if ghc.is_organization(r.owner.login):
        print("  -> Copilot availability depends on the organization plan")
    else:
        print("  -> WARNING: Copilot code review may not be available for personal accounts")
