"""Steam OpenID 2.0 login gateway."""

__version__ = "0.1.0"
