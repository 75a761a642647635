# SPDX-License-Identifier: GPL-3.0-or-later

import subprocess
from typing import List

import maint


def _ids(*args: str) -> List[str]:
    try:
        p = subprocess.run(['docker', *args, '-q'], stdout=subprocess.PIPE,
                           universal_newlines=True, check=True)
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        print(f"ERROR: docker {' '.join(args)}: {e}")
        return []
    return p.stdout.split()


def cleanup():
    """Stop and remove all containers, images and volumes.

    Every step is best-effort, e.g. there might be no containers at all.
    """
    containers = _ids('ps', '-a')
    if containers:
        print(f"Stopping {len(containers)} containers")
        maint.run(['docker', 'stop', *containers])
        print(f"Removing {len(containers)} containers")
        maint.run(['docker', 'rm', '-f', *containers])
    else:
        print("NOTE: No containers found")

    images = _ids('images')
    if images:
        print(f"Removing {len(images)} images")
        # Images may be listed multiple times with different tags
        maint.run(['docker', 'rmi', '-f', *dict.fromkeys(images)])
    else:
        print("NOTE: No images found")

    print("Pruning system (including volumes)")
    maint.run(['docker', 'system', 'prune', '-a', '--volumes', '-f'])
