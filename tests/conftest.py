# SPDX-License-Identifier: GPL-3.0-or-later

from unittest.mock import MagicMock

import pytest

from ghadmin.hub import Client


def make_repo(full_name: str = 'octo/app', default_branch: str = 'main',
              archived: bool = False) -> MagicMock:
    """Build a MagicMock that mimics a github3 ``Repository``."""
    r = MagicMock()
    r.full_name = full_name
    r.name = full_name.split('/')[1]
    r.owner.login = full_name.split('/')[0]
    r.default_branch = default_branch
    r.archived = archived
    return r


@pytest.fixture()
def repo() -> MagicMock:
    return make_repo()


@pytest.fixture()
def ghc() -> MagicMock:
    return MagicMock(spec=Client)


@pytest.fixture()
def github_error():
    """Factory for the exceptions github3 raises on error responses."""
    from github3.exceptions import error_for

    def make(status: int = 422, message: str = 'Validation Failed'):
        resp = MagicMock()
        resp.status_code = status
        resp.json.return_value = {'message': message}
        return error_for(resp)
    return make


@pytest.fixture()
def new_repo():
    return make_repo
