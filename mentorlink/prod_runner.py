"""
Production ASGI entry point.

Example usage:
    uvicorn mentorlink.prod_runner:asgi_app --host 0.0.0.0 --port 5001
"""

from mentorlink.utils.app_dependency_builder import AppDependencyBuilder


builder = AppDependencyBuilder()

asgi_app = builder.fast_app_factory.create_app(is_prod=True)
