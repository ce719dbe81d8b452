"""
# Datapoint Store (dpstore)

REST API storing sensor readings ("datapoints") in MongoDB.

Package structure:

- [API][dpstore.api] - The HTTP API implementation.

- [Binaries][dpstore.bin] under `dpstore.bin` - Executables for running the service.

- [Common][dpstore.common] - Configuration reading and the datapoint record model.

- [Database.DatapointDatabase][dpstore.database.database] - A wrapper responsible
for communication with the database server.
"""
