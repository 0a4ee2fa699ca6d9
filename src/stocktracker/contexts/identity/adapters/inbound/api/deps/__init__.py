from .current_user import RequireCurrentUserDependency

__all__ = ["RequireCurrentUserDependency"]
