"""Authentication middleware (logging stub)."""

from starlette.requests import Request

from chainmux.chain import Handler, Middleware
from chainmux.context import Context, logger_from_context
from chainmux.response import ResponseWriter


class AuthMiddleware(Middleware):
    """Log entry and exit markers around the inner handler.

    No authorization decision is made. A real implementation must keep the
    same position: inside the base chain, so recovery and the request logger
    are already in place, and outside the endpoint handler.
    """

    def wrap(self, next_handler: Handler) -> Handler:
        async def authenticate(ctx: Context, writer: ResponseWriter, request: Request) -> None:
            log = logger_from_context(ctx)
            log.info("auth_started")
            await next_handler(ctx, writer, request)
            log.info("auth_finished")

        return authenticate
