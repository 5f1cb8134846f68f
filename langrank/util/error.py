"""Errors raised while wiring the application together."""


class UtilError(Exception):
    """Base error for configuration and DI helpers."""

    pass


class ConfigurationError(UtilError):
    """A required setting is missing or unusable.

    Raised when GitHub OAuth credentials are left at their placeholder or an
    admin route is called while ADMIN__API_KEY is unset.
    """

    def __init__(self, setting: str, message: str):
        self.setting = setting
        super().__init__(f"{setting}: {message}")


class DependencyInjectionError(UtilError):
    """No provider implementation matches the requested component."""

    pass
