from boundform.middleware.method_override import MethodOverrideMiddleware

__all__ = ["MethodOverrideMiddleware"]
