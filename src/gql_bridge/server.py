"""HTTP endpoint serving the assembled schema."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from graphql import GraphQLSchema, graphql_sync
from pydantic import BaseModel

from gql_bridge.proxy import InvocationContext
from gql_bridge.translator.assembler import render_schema


class GraphQLRequest(BaseModel):
    query: str
    variables: dict | None = None
    operationName: str | None = None


def create_app(schema: GraphQLSchema) -> FastAPI:
    app = FastAPI(title="OpenAPI GraphQL Bridge")
    sdl = render_schema(schema)

    # Sync handler; FastAPI runs it in its threadpool.
    @app.post("/graphql")
    def execute(body: GraphQLRequest, request: Request):
        context = InvocationContext(authorization=request.headers.get("authorization"))
        result = graphql_sync(
            schema,
            body.query,
            variable_values=body.variables,
            operation_name=body.operationName,
            context_value=context,
        )
        status_code = 200 if result.data is not None or not result.errors else 400
        return JSONResponse(result.formatted, status_code=status_code)

    @app.get("/graphql/schema", response_class=PlainTextResponse)
    def schema_sdl():
        return sdl

    return app
