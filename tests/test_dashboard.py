"""Session Guard and Dashboard Shell against mocked gateways."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from folio.core.errors import AuthenticationRequired, AuthorizationDenied, TransientFetchError
from folio.core.gateways import Session
from folio.core.logging_service import LoggingService
from folio.core.notices import NoticeBoard
from folio.modules.auth.guard import (
    AUTHORIZED,
    DENIAL_MESSAGE,
    FORBIDDEN,
    UNAUTHENTICATED,
    SessionGuard,
)
from folio.modules.dashboard.shell import DashboardShell
from folio.modules.projects.controller import ProjectsController
from folio.modules.settings.controller import SiteSettingsController
from folio.modules.settings.models import Existing
from folio.modules.skills.controller import SkillsController


def _auth(session=None, admin=False):
    auth = MagicMock()
    auth.get_session = AsyncMock(return_value=session)
    auth.has_role = AsyncMock(return_value=admin)
    auth.sign_out = AsyncMock()
    return auth


def _shell(auth, data):
    notices = NoticeBoard()
    return DashboardShell(
        SessionGuard(auth, "admin"),
        auth,
        ProjectsController(data, notices),
        SiteSettingsController(data, notices),
        SkillsController(data, notices),
        notices,
        login_url="/admin/login",
        home_url="/",
    )


@pytest.fixture
def data():
    data = AsyncMock()
    data.list.return_value = []
    data.get_singleton.return_value = None
    return data


# ---------------------------------------------------------------------------
# Guard
# ---------------------------------------------------------------------------

def test_guard_without_session():
    auth = _auth()
    result = asyncio.run(SessionGuard(auth).authorize())

    assert result.reason == UNAUTHENTICATED
    auth.has_role.assert_not_awaited()
    with pytest.raises(AuthenticationRequired):
        result.raise_for_reason()


def test_guard_without_role():
    auth = _auth(Session("u1", "u1@example.com"), admin=False)
    result = asyncio.run(SessionGuard(auth, "admin").authorize())

    assert result.reason == FORBIDDEN
    auth.has_role.assert_awaited_once_with("u1", "admin")
    with pytest.raises(AuthorizationDenied):
        asyncio.run(SessionGuard(auth, "admin").require())


def test_guard_with_role():
    auth = _auth(Session("u1"), admin=True)
    result = asyncio.run(SessionGuard(auth).require())
    assert result.authorized
    assert result.session.user_id == "u1"


def test_guard_lookup_failures_deny():
    auth = _auth(Session("u1"))
    auth.has_role.side_effect = TransientFetchError("offline")
    assert asyncio.run(SessionGuard(auth).authorize()).reason == FORBIDDEN

    auth.get_session.side_effect = TransientFetchError("offline")
    assert asyncio.run(SessionGuard(auth).authorize()).reason == UNAUTHENTICATED


# ---------------------------------------------------------------------------
# Shell mount
# ---------------------------------------------------------------------------

def test_mount_without_session_loads_nothing(data):
    shell = _shell(_auth(), data)
    result = asyncio.run(shell.mount())

    assert result.reason == UNAUTHENTICATED
    assert result.redirect_to == "/admin/login"
    data.list.assert_not_awaited()
    data.get_singleton.assert_not_awaited()
    assert shell.notices.drain() == []


def test_mount_without_role_denies_and_loads_nothing(data):
    shell = _shell(_auth(Session("u1"), admin=False), data)
    result = asyncio.run(shell.mount())

    assert result.reason == FORBIDDEN
    assert result.redirect_to == "/"
    data.list.assert_not_awaited()
    data.get_singleton.assert_not_awaited()
    assert shell.notices.drain() == [
        {"title": "Access Denied", "description": DENIAL_MESSAGE, "variant": "destructive"}
    ]


def test_mount_loads_all_three(data):
    data.get_singleton.return_value = {"id": "s1", "hero_title": "Hi"}
    shell = _shell(_auth(Session("u1"), admin=True), data)
    assert shell.loading is True

    result = asyncio.run(shell.mount())

    assert result.reason == AUTHORIZED
    assert shell.loading is False
    assert {call.args[0] for call in data.list.await_args_list} == {"projects", "skills"}
    data.get_singleton.assert_awaited_once_with("site_settings")
    assert shell.settings.identity == Existing("s1")


def test_one_failed_load_does_not_block_the_others(data):
    async def list_collection(collection, order_by=None, filters=None):
        if collection == "projects":
            raise TransientFetchError("offline")
        return [{"id": "k1", "name": "Python", "category": "Languages", "proficiency": 90}]

    data.list.side_effect = list_collection
    shell = _shell(_auth(Session("u1"), admin=True), data)

    asyncio.run(shell.mount())

    assert shell.loading is False
    assert shell.projects.items == []
    assert [s.name for s in shell.skills.items] == ["Python"]
    assert [n["description"] for n in shell.notices.drain()] == ["Failed to load projects"]


def test_loading_clears_on_unexpected_failure(data):
    data.get_singleton.side_effect = RuntimeError("boom")
    shell = _shell(_auth(Session("u1"), admin=True), data)

    with patch.object(LoggingService, "error") as log_error:
        asyncio.run(shell.mount())

    source, message, details = log_error.call_args.args
    assert source == "dashboard"
    assert message == "Exception occurred: RuntimeError"
    assert details["additional_details"] == {"tab": "settings"}
    assert "RuntimeError: boom" in details["traceback"]
    assert "_fetch" in details["traceback"]

    assert shell.loading is False
    assert "Failed to load settings" in [n["description"] for n in shell.notices.drain()]


# ---------------------------------------------------------------------------
# Tabs / sign out
# ---------------------------------------------------------------------------

def test_switch_tab_does_not_refetch(data):
    shell = _shell(_auth(Session("u1"), admin=True), data)
    asyncio.run(shell.mount())
    calls = data.list.await_count

    shell.switch_tab("skills")
    shell.switch_tab("settings")

    assert shell.active_tab == "settings"
    assert data.list.await_count == calls
    with pytest.raises(ValueError):
        shell.switch_tab("analytics")


def test_sign_out_goes_home(data):
    auth = _auth(Session("u1"), admin=True)
    shell = _shell(auth, data)

    assert asyncio.run(shell.sign_out()) == "/"
    auth.sign_out.assert_awaited_once()
