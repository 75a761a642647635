# SPDX-License-Identifier: GPL-3.0-or-later

import os
import os.path


def rename_upper(path: str) -> str:
    path = path.rstrip(os.sep) or path
    if not os.path.isdir(path):
        raise NotADirectoryError(path)

    parent, name = os.path.split(path)
    new_path = os.path.join(parent, name.upper())
    if new_path == path:
        print(f"NOTE: Directory name is already {new_path}")
        return new_path
    # Would silently move the directory into the existing one otherwise
    if os.path.exists(new_path):
        raise FileExistsError(new_path)

    os.rename(path, new_path)
    print(f"Directory name changed to {new_path}")
    return new_path
