#!/usr/bin/env python3
# SPDX-License-Identifier: GPL-3.0-or-later

import argparse
import os
import sys
from typing import List, Optional

import maint.cursor
import maint.docker
import maint.fs
import maint.git
import maint.services


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Host maintenance helpers")
    sub = parser.add_subparsers(dest='command', metavar='command', required=True)

    p = sub.add_parser('pull-all', help="git fetch/pull all repositories in a directory")
    p.add_argument('root', nargs='?', default=os.getcwd(),
                   help="Directory containing the repositories (default: current directory)")

    sub.add_parser('docker-cleanup',
                   help="Stop and remove ALL Docker containers, images and volumes")

    p = sub.add_parser('disable-services', help="Disable commonly unneeded systemd services")
    p.add_argument('services', nargs='*', default=maint.services.UBUNTU_24_SERVICES,
                   help="Services to disable (default: Ubuntu 24.04 list)")

    p = sub.add_parser('rename-upper', help="Rename a directory to upper case")
    p.add_argument('directory')

    p = sub.add_parser('cursor-profile', help="Create an isolated Cursor editor profile")
    p.add_argument('name', help="Profile name, e.g. rust or python-ml")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == 'pull-all':
        maint.git.pull_all(args.root)
    elif args.command == 'docker-cleanup':
        maint.docker.cleanup()
    elif args.command == 'disable-services':
        if maint.services.disable(args.services):
            return 1
    elif args.command == 'rename-upper':
        try:
            maint.fs.rename_upper(args.directory)
        except OSError as e:
            print(f"ERROR: {e}")
            return 1
    elif args.command == 'cursor-profile':
        try:
            maint.cursor.create_profile(args.name)
        except ValueError as e:
            parser.error(str(e))
    return 0


if __name__ == '__main__':
    sys.exit(main())
