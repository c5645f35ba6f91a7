"""
Dashboard Shell
===============

Runs the Session Guard once at mount, then loads projects, site settings and
skills concurrently. One aggregate loading flag covers all three loads and
clears once every load has settled, whether it succeeded or not. Switching
tabs never refetches.
"""

import asyncio

from ...core.logging_service import LoggingService
from ..auth.guard import AUTHORIZED, DENIAL_MESSAGE, FORBIDDEN, UNAUTHENTICATED

TABS = ('projects', 'settings', 'skills')


class MountResult:
    def __init__(self, reason, redirect_to=None):
        self.reason = reason
        self.redirect_to = redirect_to

    @property
    def authorized(self):
        return self.reason == AUTHORIZED

    def __repr__(self):
        return f"MountResult({self.reason!r}, redirect_to={self.redirect_to!r})"


class DashboardShell:

    def __init__(self, guard, auth, projects, settings, skills, notices,
                 login_url='/admin/login', home_url='/'):
        self.guard = guard
        self.auth = auth
        self.projects = projects
        self.settings = settings
        self.skills = skills
        self.notices = notices
        self.login_url = login_url
        self.home_url = home_url
        self.active_tab = TABS[0]
        self.loading = True

    @property
    def controllers(self):
        return {'projects': self.projects, 'settings': self.settings, 'skills': self.skills}

    async def mount(self):
        result = await self.guard.authorize()
        if result.reason == UNAUTHENTICATED:
            return MountResult(UNAUTHENTICATED, self.login_url)
        if result.reason == FORBIDDEN:
            self.notices.deny(DENIAL_MESSAGE)
            return MountResult(FORBIDDEN, self.home_url)

        self.loading = True
        try:
            outcomes = await asyncio.gather(
                *(controller.load() for controller in self.controllers.values()),
                return_exceptions=True,
            )
        finally:
            self.loading = False

        for tab, outcome in zip(self.controllers, outcomes):
            if isinstance(outcome, Exception):
                LoggingService.log_error_with_traceback('dashboard', outcome, {'tab': tab})
                self.notices.error(f"Failed to load {tab}")
        return MountResult(AUTHORIZED)

    def switch_tab(self, tab):
        if tab not in TABS:
            raise ValueError(f"Unknown tab: {tab}")
        self.active_tab = tab

    async def sign_out(self):
        await self.auth.sign_out()
        return self.home_url

    def view(self):
        return {
            'active_tab': self.active_tab,
            'tabs': list(TABS),
            'loading': self.loading,
            'projects': self.projects.view(),
            'settings': self.settings.view(),
            'skills': self.skills.view(),
            'notices': self.notices.drain(),
        }
