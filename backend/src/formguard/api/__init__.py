from formguard.api.app import app

__all__ = ["app"]
