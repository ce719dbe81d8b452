"""
Datapoint store HTTP API implementation.

The app is built by [`create_app`][dpstore.api.main.create_app].
See the individual routers to see the API endpoint implementation.

- [`root`][dpstore.api.routers.root] - health check and status endpoints.
- [`datapoint`][dpstore.api.routers.datapoint] - implements the datapoint endpoints,
  `/v1/datapoint/*`.
"""
