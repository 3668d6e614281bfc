"""Tests for route table configuration loading."""

import pytest

import yaml

from routeauth.common.config import (
    build_resolver,
    build_route_table,
    load_config,
    load_registry,
    parse_redirect_rules,
    parse_route_configs,
)
from routeauth.core.config import Settings, get_settings
from routeauth.core.rbac.permissions import Action, Permission
from routeauth.core.routes.redirect import RedirectRule
from routeauth.core.routes.registry import RouteConfigError, get_default_registry


SAMPLE_YAML = """
routes:
  - path: /home
    required_roles: [Admin, User, Sale]
  - path: /users
    requiredRoles: [Admin]
    required_permissions:
      - user:read
      - {action: manage, resource: user}
    redirect_to: /home
  - path: /reports/
    required_roles: ["${REPORT_ROLE}"]
default_redirects:
  - {role: Admin, path: /users}
fallback_redirect: /home
"""


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    monkeypatch.setenv("REPORT_ROLE", "Analyst")
    path = tmp_path / "routes.yaml"
    path.write_text(SAMPLE_YAML)
    return path


class TestLoadConfig:
    """Tests for YAML loading."""

    def test_load_config(self, config_file):
        config = load_config(str(config_file))
        assert len(config["routes"]) == 3

    def test_env_vars_expanded(self, config_file):
        config = load_config(str(config_file))
        assert config["routes"][2]["required_roles"] == ["Analyst"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)) == {}

    def test_non_mapping_root(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- /home\n- /users\n")
        with pytest.raises(TypeError):
            load_config(str(path))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("routes: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_config(str(path))


class TestParseRoutes:
    """Tests for route table parsing."""

    def test_parse_route_configs(self, config_file):
        routes = parse_route_configs(load_config(str(config_file)))

        assert [r.path for r in routes] == ["/home", "/users", "/reports"]
        users = routes[1]
        assert users.required_roles == ("Admin",)
        assert users.redirect_to == "/home"
        assert users.required_permissions == (
            Permission(Action.READ, "user"),
            Permission(Action.MANAGE, "user"),
        )

    def test_no_routes_section(self):
        assert parse_route_configs({}) == []
        assert parse_route_configs({"routes": None}) == []

    def test_routes_not_a_list(self):
        with pytest.raises(RouteConfigError):
            parse_route_configs({"routes": {"path": "/home"}})

    def test_duplicate_paths(self):
        with pytest.raises(RouteConfigError):
            parse_route_configs({"routes": [{"path": "/a"}, {"path": "//a/"}]})

    def test_unknown_field(self):
        with pytest.raises(RouteConfigError):
            parse_route_configs({"routes": [{"path": "/a", "roles": ["Admin"]}]})

    def test_load_registry(self, config_file):
        registry = load_registry(str(config_file))
        assert len(registry) == 3
        assert registry.get("/reports").required_roles == ("Analyst",)


class TestRedirectRules:
    """Tests for redirect rule parsing."""

    def test_parse_redirect_rules(self, config_file):
        rules = parse_redirect_rules(load_config(str(config_file)))
        assert rules == [RedirectRule("Admin", "/users")]

    def test_missing_section(self):
        assert parse_redirect_rules({}) == []

    def test_invalid_entry(self):
        with pytest.raises(RouteConfigError):
            parse_redirect_rules({"default_redirects": [{"role": "Admin"}]})

    def test_build_resolver_defaults(self):
        resolver = build_resolver({})
        assert resolver.get_default_redirect_path(["Sale"]) == "/plans"

    def test_null_fallback_uses_default(self):
        resolver = build_resolver({"fallback_redirect": None})
        assert resolver.get_default_redirect_path(["User"]) == "/home"

    def test_empty_fallback_uses_default(self):
        resolver = build_resolver({"fallback_redirect": ""})
        assert resolver.get_default_redirect_path(["User"]) == "/home"

    def test_non_string_fallback(self):
        with pytest.raises(RouteConfigError):
            build_resolver({"fallback_redirect": ["/home"]})

    def test_explicit_empty_rules(self):
        """An empty list disables the built-in rules."""
        resolver = build_resolver({"default_redirects": [], "fallback_redirect": "/home"})
        assert resolver.get_default_redirect_path(["Sale"]) == "/home"
        assert resolver.get_default_redirect_path(["Admin"]) == "/home"
        assert resolver.get_default_redirect_path([]) == "/login"

    def test_null_rules_use_builtin(self):
        resolver = build_resolver({"default_redirects": None})
        assert resolver.get_default_redirect_path(["Sale"]) == "/plans"

    def test_rules_not_a_list(self):
        with pytest.raises(RouteConfigError):
            parse_redirect_rules({"default_redirects": {"role": "Admin", "path": "/x"}})

    def test_empty_rules_from_yaml(self, tmp_path):
        path = tmp_path / "routes.yaml"
        path.write_text(
            "routes:\n"
            "  - path: /plans\n"
            "    required_roles: [Sale]\n"
            "default_redirects: []\n"
            "fallback_redirect:\n"
        )
        _, resolver = build_route_table(Settings(route_config_path=str(path)))
        assert resolver.get_default_redirect_path(["Sale"]) == "/home"

    def test_build_resolver_custom(self, config_file):
        resolver = build_resolver(load_config(str(config_file)), login_path="/signin")
        assert resolver.get_default_redirect_path(["Admin"]) == "/users"
        assert resolver.get_default_redirect_path(["Sale"]) == "/home"
        assert resolver.get_default_redirect_path([]) == "/signin"


class TestBuildRouteTable:
    """Tests for build_route_table."""

    def test_builtin(self):
        registry, resolver = build_route_table(Settings())
        assert registry is get_default_registry()
        assert resolver.login_path == "/login"

    def test_without_settings(self):
        registry, _ = build_route_table()
        assert registry is get_default_registry()

    def test_from_yaml(self, config_file):
        registry, resolver = build_route_table(
            Settings(route_config_path=str(config_file), login_path="/signin"),
        )
        assert registry.paths() == ["/home", "/users", "/reports"]
        assert resolver.login_path == "/signin"


class TestSettings:
    """Tests for application settings."""

    def test_defaults(self):
        settings = Settings()
        assert settings.login_path == "/login"
        assert settings.denial_log_capacity == 100
        assert settings.public_routes_list == ["/login", "/register", "/forgot-password"]
        assert settings.route_config_path is None

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("ROUTEAUTH_LOGIN_PATH", "/signin")
        monkeypatch.setenv("ROUTEAUTH_PUBLIC_ROUTES", "/signin, /status ,")
        monkeypatch.setenv("ROUTEAUTH_DENIAL_LOG_CAPACITY", "10")

        settings = Settings()
        assert settings.login_path == "/signin"
        assert settings.public_routes_list == ["/signin", "/status"]
        assert settings.denial_log_capacity == 10

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()
