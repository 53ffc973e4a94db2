from boundform.lib.csrf import check_token, current_token, verify_token
from boundform.lib.template import configure_engine, register_helpers

__all__ = ["check_token", "current_token", "verify_token", "configure_engine", "register_helpers"]
