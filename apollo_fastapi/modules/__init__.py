from apollo_fastapi.modules.graphiql import GraphiQLData, render_graphiql_page

__all__ = ["GraphiQLData", "render_graphiql_page"]
