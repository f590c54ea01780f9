"""
GraphiQL Page Template

Renders the static HTML page for the GraphiQL interactive query explorer.
The page loads GraphiQL from a CDN and sends every query as a JSON POST to
``endpoint_url``.

GraphiQLData fields:

- endpoint_url: the relative or absolute URL GraphiQL sends queries to
- (optional) query: the GraphQL query to pre-fill in the editor
- (optional) variables: a dict of variables to pre-fill
- (optional) operation_name: the operation name to pre-fill
- (optional) result: a result to pre-fill in the response pane
"""

import json
from dataclasses import dataclass
from string import Template
from typing import Any, Dict, Optional

GRAPHIQL_VERSION = "0.7.1"
REACT_VERSION = "15.0.1"
FETCH_VERSION = "0.9.0"


@dataclass
class GraphiQLData:
    endpoint_url: str
    query: Optional[str] = None
    variables: Optional[Dict[str, Any]] = None
    operation_name: Optional[str] = None
    result: Optional[Dict[str, Any]] = None


def safe_serialize(value: Any) -> str:
    """Serialize ``value`` as a JS literal that cannot break out of a <script> tag."""
    if value is None:
        return "undefined"
    return (
        json.dumps(value)
        .replace("</", "<\\/")
        .replace("<!--", "<\\!--")
    )


PAGE_TEMPLATE = Template("""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8" />
  <title>GraphiQL</title>
  <meta name="robots" content="noindex" />
  <style>
    html, body {
      height: 100%;
      margin: 0;
      overflow: hidden;
      width: 100%;
    }
  </style>
  <link href="//cdn.jsdelivr.net/graphiql/${graphiql_version}/graphiql.css" rel="stylesheet" />
  <script src="//cdn.jsdelivr.net/fetch/${fetch_version}/fetch.min.js"></script>
  <script src="//cdn.jsdelivr.net/react/${react_version}/react.min.js"></script>
  <script src="//cdn.jsdelivr.net/react/${react_version}/react-dom.min.js"></script>
  <script src="//cdn.jsdelivr.net/graphiql/${graphiql_version}/graphiql.min.js"></script>
</head>
<body>
  <script>
    // Collect the URL parameters
    var parameters = {};
    window.location.search.substr(1).split('&').forEach(function (entry) {
      var eq = entry.indexOf('=');
      if (eq >= 0) {
        parameters[decodeURIComponent(entry.slice(0, eq))] =
          decodeURIComponent(entry.slice(eq + 1).replace(/\\+/g, '%20'));
      }
    });

    // Produce a Location query string from a parameter object.
    function locationQuery(params) {
      return '?' + Object.keys(params).filter(function (key) {
        return Boolean(params[key]);
      }).map(function (key) {
        return encodeURIComponent(key) + '=' + encodeURIComponent(params[key]);
      }).join('&');
    }

    var fetchURL = ${endpoint_url};

    // Defines a GraphQL fetcher using the fetch API.
    function graphQLFetcher(graphQLParams) {
      return fetch(fetchURL, {
        method: 'post',
        headers: {
          'Accept': 'application/json',
          'Content-Type': 'application/json'
        },
        body: JSON.stringify(graphQLParams),
        credentials: 'include',
      }).then(function (response) {
        return response.text();
      }).then(function (responseBody) {
        try {
          return JSON.parse(responseBody);
        } catch (error) {
          return responseBody;
        }
      });
    }

    // When the query and variables string is edited, update the URL bar so
    // that it can be easily shared.
    function onEditQuery(newQuery) {
      parameters.query = newQuery;
      updateURL();
    }
    function onEditVariables(newVariables) {
      parameters.variables = newVariables;
      updateURL();
    }
    function onEditOperationName(newOperationName) {
      parameters.operationName = newOperationName;
      updateURL();
    }
    function updateURL() {
      history.replaceState(null, null, locationQuery(parameters));
    }

    // Render <GraphiQL /> into the body.
    ReactDOM.render(
      React.createElement(GraphiQL, {
        fetcher: graphQLFetcher,
        onEditQuery: onEditQuery,
        onEditVariables: onEditVariables,
        onEditOperationName: onEditOperationName,
        query: ${query},
        response: ${result},
        variables: ${variables},
        operationName: ${operation_name},
      }),
      document.body
    );
  </script>
</body>
</html>
""")


def render_graphiql_page(data: GraphiQLData) -> str:
    """Render the GraphiQL HTML document for ``data``."""
    variables = json.dumps(data.variables, indent=2) if data.variables else None
    result = json.dumps(data.result, indent=2) if data.result else None

    return PAGE_TEMPLATE.substitute(
        graphiql_version=GRAPHIQL_VERSION,
        react_version=REACT_VERSION,
        fetch_version=FETCH_VERSION,
        endpoint_url=safe_serialize(data.endpoint_url),
        query=safe_serialize(data.query),
        result=safe_serialize(result),
        variables=safe_serialize(variables),
        operation_name=safe_serialize(data.operation_name),
    )
