# SPDX-License-Identifier: GPL-3.0-or-later

import subprocess
from typing import List


def run(args: List[str], **kwargs) -> bool:
    """Run a command, report failure and carry on."""
    try:
        subprocess.run(args, check=True, **kwargs)
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        print(f"ERROR: {' '.join(args)}: {e}")
        return False
    return True
