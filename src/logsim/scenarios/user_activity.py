"""User activity events: logins, logouts, page views and clicks."""

from .. import domains
from ..events import Level, LogEvent
from .base import ScenarioContext, scenario

CATEGORY = "user-activity"


@scenario("user_login", category=CATEGORY, description="Successful login with session id")
def user_login(ctx: ScenarioContext) -> LogEvent:
    return ctx.event(
        Level.INFO,
        "User login successful",
        CATEGORY,
        event="login",
        userId=ctx.choice(domains.USERS, "user_1"),
        ip=ctx.ip("10.0"),
        sessionId=ctx.ids.session_id(),
        loginMethod=ctx.choice(domains.LOGIN_METHODS, "password"),
    )


@scenario("user_logout", category=CATEGORY, description="Logout with session length")
def user_logout(ctx: ScenarioContext) -> LogEvent:
    return ctx.event(
        Level.INFO,
        "User logout",
        CATEGORY,
        event="logout",
        userId=ctx.choice(domains.USERS, "user_1"),
        sessionDuration=ctx.below(3600),
    )


@scenario("page_view", category=CATEGORY, description="Page view with load time and browser")
def page_view(ctx: ScenarioContext) -> LogEvent:
    return ctx.event(
        Level.INFO,
        "Page view",
        CATEGORY,
        event="page_view",
        userId=ctx.choice(domains.USERS, "user_1"),
        page=ctx.choice(domains.PAGES, "/"),
        referrer=ctx.choice(domains.REFERRERS, "direct"),
        loadTime=ctx.below(2000),
        browser=ctx.choice(domains.BROWSERS, "Chrome"),
    )


@scenario("user_click", category=CATEGORY, description="UI element click")
def user_click(ctx: ScenarioContext) -> LogEvent:
    return ctx.event(
        Level.INFO,
        "User action",
        CATEGORY,
        event="click",
        userId=ctx.choice(domains.USERS, "user_1"),
        element=ctx.choice(domains.CLICK_ELEMENTS, "nav_menu"),
        page=ctx.choice(domains.PAGES, "/"),
    )
