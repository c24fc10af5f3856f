from typing import Any

import streamlit as st

from src.config import Screen
from src.restaurants.domain.ports import INavigator, INotifier
from src.restaurants.presentation.state_provider import IStateProvider
from src.shared.telemetry import Telemetry

ROUTE_KEY = "route"
ROUTE_PARAMS_KEY = "route_params"
NOTIFICATIONS_KEY = "pending_notifications"


class StreamlitNavigator(INavigator):
    """
    Stores the target route in session state; app.py reads it on the next
    rerun to pick the screen.
    """

    def __init__(self, state_provider: IStateProvider) -> None:
        self.state = state_provider
        self.telemetry = Telemetry("Navigator")

    def navigate(self, screen: Screen, params: dict[str, Any] | None = None) -> None:
        self.telemetry.log_info(f"Navigate -> {screen.route}", params=list((params or {}).keys()))
        self.state.set(ROUTE_KEY, screen.route)
        self.state.set(ROUTE_PARAMS_KEY, params or {})

    def current(self) -> tuple[Screen, dict[str, Any]]:
        route = self.state.get(ROUTE_KEY, Screen.HOME.route)
        return Screen.from_route(route), self.state.get(ROUTE_PARAMS_KEY, {})


class StreamlitNotifier(INotifier):
    """
    Queues notifications in session state. Button callbacks run before the
    page is drawn, so toasts are flushed by the view on the following render.
    """

    def __init__(self, state_provider: IStateProvider) -> None:
        self.state = state_provider

    def notify(self, title: str, message: str) -> None:
        pending = list(self.state.get(NOTIFICATIONS_KEY, []))
        pending.append((title, message))
        self.state.set(NOTIFICATIONS_KEY, pending)

    def flush(self) -> list[tuple[str, str]]:
        pending = self.state.pop(NOTIFICATIONS_KEY, []) or []
        for title, message in pending:
            icon = "✅" if title == "Success" else "⚠️"
            st.toast(f"**{title}**: {message}", icon=icon)
        return pending
