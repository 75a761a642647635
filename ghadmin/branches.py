# SPDX-License-Identifier: GPL-3.0-or-later

from github3.repos.repo import Repository

from ghadmin.hub import Client

DEFAULT_BRANCH = 'dev'


def ensure_branch(ghc: Client, r: Repository, name: str = DEFAULT_BRANCH) -> bool:
    if ghc.branch_exists(r, name):
        print(f"  -> {name} already exists")
        return False

    print(f"  -> Creating branch {name} from {r.default_branch}")
    if ghc.create_branch(r, name) is None:
        print(f"  -> ERROR: Default branch {r.default_branch} does not exist "
              "(empty repository?)")
        return False
    print(f"  -> {name} created")
    return True
