# SPDX-License-Identifier: GPL-3.0-or-later

import os
import os.path
import shutil
from dataclasses import dataclass
from typing import Optional

_CACHES = ['CachedData', 'CachedExtensionVSIXs', 'CachedProfilesData']


@dataclass
class Paths:
    base_dir: str
    source_config: str
    source_extensions: str

    @classmethod
    def default(cls) -> 'Paths':
        home = os.path.expanduser('~')
        return cls(os.path.join(home, 'cursor-profiles'),
                   os.path.join(home, '.config', 'Cursor'),
                   os.path.join(home, '.cursor', 'extensions'))


def _confirm_overwrite(profile_dir: str) -> bool:
    answer = input("Overwrite? (y/N): ")
    return answer.strip() in ('y', 'Y')


def create_profile(name: str, paths: Optional[Paths] = None, confirm=_confirm_overwrite) -> str:
    """Create an isolated Cursor profile with copied settings and extensions."""
    if not name or '/' in name or '\\' in name:
        raise ValueError("Profile name cannot contain slashes")

    paths = paths or Paths.default()
    profile_dir = os.path.join(paths.base_dir, name)
    data_dir = os.path.join(profile_dir, 'data')

    if os.path.isdir(profile_dir):
        print(f"WARNING: Profile directory already exists: {profile_dir}")
        if not confirm(profile_dir):
            print("Aborted.")
            return profile_dir
        shutil.rmtree(profile_dir)

    print(f"Creating Cursor profile: {name}")
    print(f"Location: {profile_dir}")
    os.makedirs(data_dir)
    os.makedirs(os.path.join(profile_dir, 'extensions'))

    # settings.json, keybindings.json, snippets, ...
    user_dir = os.path.join(paths.source_config, 'User')
    if os.path.isdir(user_dir):
        shutil.copytree(user_dir, os.path.join(data_dir, 'User'), symlinks=True)
        print("  • Copied User settings & snippets")
    else:
        print(f"WARNING: User settings directory not found ({user_dir})")

    for cache in _CACHES:
        src = os.path.join(paths.source_config, cache)
        if os.path.isdir(src):
            shutil.copytree(src, os.path.join(data_dir, cache), symlinks=True)
            print(f"  • Copied {cache}")

    if os.path.isdir(paths.source_extensions):
        extensions = os.listdir(paths.source_extensions)
        shutil.copytree(paths.source_extensions, os.path.join(profile_dir, 'extensions'),
                        dirs_exist_ok=True)
        print(f"  • Copied extensions ({len(extensions)} folders)")
    else:
        print(f"WARNING: Global extensions folder not found ({paths.source_extensions})")

    print()
    print(f"Profile '{name}' created successfully!")
    print()
    print("To use it, run:")
    print(f'  cursor --user-data-dir "{data_dir}" '
          f'--extensions-dir "{os.path.join(profile_dir, "extensions")}" .')
    return profile_dir
