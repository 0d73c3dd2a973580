"""Tests for the application factory and router assembly."""

from fastapi.routing import APIRoute

from src.adapters.api.v1 import api_router
from src.core.application import create_application


class TestRouterAssembly:
    def test_current_user_routes_are_mounted(self):
        paths = {(method, route.path) for route in api_router.routes if isinstance(route, APIRoute) for method in route.methods}

        assert ("GET", "/users/me") in paths
        assert ("PATCH", "/users/me/profile") in paths
        assert ("PATCH", "/users/me/username") in paths
        assert ("POST", "/users/me/password") in paths
        assert ("POST", "/users/me/phone/verification") in paths
        assert ("PATCH", "/users/me/phone/verification/confirm") in paths
        assert ("POST", "/users/me/phone/verification/resend-otp") in paths
        assert ("POST", "/users/me/disable") in paths

    def test_application_exposes_versioned_prefix(self, container):
        app = create_application(container=container)

        paths = {route.path for route in app.routes if isinstance(route, APIRoute)}

        assert "/api/v1/auth/signup" in paths
        assert "/api/v1/users/me" in paths
        assert app.state.container is container
