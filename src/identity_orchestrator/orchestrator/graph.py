from __future__ import annotations

from collections.abc import Awaitable, Callable

from langgraph.graph import END, StateGraph

from identity_orchestrator.orchestrator.nodes import (
    CycleDeps,
    check_session_node,
    classify_node,
    dispatch_node,
    federate_node,
    login_redirect_node,
    oauth_callback_node,
    oidc_callback_node,
    resolve_claims_node,
    route_after_classify,
    route_after_session,
    sync_user_node,
)
from identity_orchestrator.orchestrator.state import AuthCycleState


def build_graph(*, deps: CycleDeps):
    """
    Returns a compiled LangGraph runnable for one authentication cycle.

    classify -> [oauth_callback | oidc_callback] -> check_session
    check_session -> login_redirect -> END
    check_session -> resolve_claims -> federate -> sync_user -> dispatch -> END
    """

    graph = StateGraph(AuthCycleState)

    graph.add_node("classify", classify_node)
    graph.add_node("oauth_callback", _bind_deps(oauth_callback_node, deps))
    graph.add_node("oidc_callback", _bind_deps(oidc_callback_node, deps))
    graph.add_node("check_session", _bind_deps(check_session_node, deps))
    graph.add_node("login_redirect", _bind_deps(login_redirect_node, deps))
    graph.add_node("resolve_claims", _bind_deps(resolve_claims_node, deps))
    graph.add_node("federate", _bind_deps(federate_node, deps))
    graph.add_node("sync_user", _bind_deps(sync_user_node, deps))
    graph.add_node("dispatch", dispatch_node)

    graph.set_entry_point("classify")

    graph.add_conditional_edges(
        "classify",
        route_after_classify,
        {
            "oauth_callback": "oauth_callback",
            "oidc_callback": "oidc_callback",
            "check_session": "check_session",
        },
    )
    graph.add_edge("oauth_callback", "check_session")
    graph.add_edge("oidc_callback", "check_session")

    graph.add_conditional_edges(
        "check_session",
        route_after_session,
        {"resolve_claims": "resolve_claims", "login_redirect": "login_redirect"},
    )
    graph.add_edge("login_redirect", END)

    # Strict order: federation needs the raw id token, sync needs decoded roles.
    graph.add_edge("resolve_claims", "federate")
    graph.add_edge("federate", "sync_user")
    graph.add_edge("sync_user", "dispatch")
    graph.add_edge("dispatch", END)

    return graph.compile()


def _bind_deps(
    fn: Callable[..., Awaitable[AuthCycleState]],
    deps: CycleDeps,
) -> Callable[[AuthCycleState], Awaitable[AuthCycleState]]:
    async def _wrapped(state: AuthCycleState) -> AuthCycleState:
        return await fn(state, deps=deps)

    return _wrapped
