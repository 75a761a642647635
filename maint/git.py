# SPDX-License-Identifier: GPL-3.0-or-later

import os.path
from datetime import datetime

import maint

_GIT_DIR = '.git'


def pull_all(root: str) -> int:
    """Fetch and pull every git repository directly below root."""
    updated = 0

    for name in sorted(os.listdir(root)):
        repo_dir = os.path.join(root, name)
        if not os.path.isdir(repo_dir):
            continue

        print(f"Updating {repo_dir} at {datetime.now():%c}")
        if os.path.isdir(os.path.join(repo_dir, _GIT_DIR)):
            maint.run(['git', 'status'], cwd=repo_dir)
            print("Fetching")
            ok = maint.run(['git', 'fetch'], cwd=repo_dir)
            print("Pulling")
            if maint.run(['git', 'pull'], cwd=repo_dir) and ok:
                updated += 1
        else:
            print("Skipping: not a git repo")
        print(f"Done at {datetime.now():%c}")
        print()

    return updated
