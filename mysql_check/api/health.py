from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from fastapi.routing import APIRoute
from starlette.routing import Match
from starlette.types import Receive, Scope, Send

from mysql_check.core.context import AppContext, get_context
from mysql_check.core.errors import HealthCheckError, server_error
from mysql_check.infra.db import Connector, get_connector
from mysql_check.services.check_service import run_check


class AnyMethodRoute(APIRoute):
    """APIRoute serving every request method, non-standard tokens included"""

    def matches(self, scope: Scope) -> tuple[Match, Scope]:
        match, child_scope = super().matches(scope)
        # PARTIAL means the path matched but the method did not
        if match == Match.PARTIAL:
            match = Match.FULL
        return match, child_scope

    async def handle(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.app(scope, receive, send)


router = APIRouter(route_class=AnyMethodRoute)

ContextDep = Annotated[AppContext, Depends(get_context)]
ConnectorDep = Annotated[Connector, Depends(get_connector)]


@router.api_route("/", include_in_schema=False)
async def check_mysql(context: ContextDep, connector: ConnectorDep) -> Response:
    """Answer 200 when MySQL is reachable and writable. Failures become 503."""
    try:
        await run_check(context, connector)
    except HealthCheckError as e:
        return server_error(context, e)
    return Response(status_code=status.HTTP_200_OK)
