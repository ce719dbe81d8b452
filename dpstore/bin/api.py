#!/usr/bin/env python3
"""
Run the datapoint store API using uvicorn.

Configuration is read from the directory given by the `CONF_DIR` environment variable.
"""
import uvicorn


def init_parser(parser):
    parser.add_argument(
        "--host",
        type=str,
        default="0.0.0.0",
        help="The host to bind to. (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port", type=int, default=5000, help="The port to bind to. (default: 5000)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        default=False,
        help="Enable auto-reload of the api. (API changes will be picked up automatically.)",
    )


def main(args):
    uvicorn.run(
        "dpstore.api.main:app_from_env",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
