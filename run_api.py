#!/usr/bin/env python3
"""
FastAPI Server Launcher for the Grade Rank Calculator API

Usage:
    python run_api.py [--config config/config.yaml]

Host, port and reload mode come from the `api` section of the config.
API documentation is served at /docs.
"""

import argparse

import uvicorn

from utils.config import DEFAULT_CONFIG_PATH, load_config


def get_server_options(config: dict) -> dict:
    """uvicorn keyword arguments from the `api` config section."""
    api = config['api']
    return {
        'host': str(api.get('host', '0.0.0.0')),
        'port': int(api.get('port', 8000)),
        'reload': bool(api.get('reload', False)),
        'log_level': 'info'
    }


def main(args):
    options = get_server_options(load_config(args.config))
    display_host = 'localhost' if options['host'] == '0.0.0.0' else options['host']

    print("\n" + "="*80)
    print("Starting Grade Rank Calculator API Server")
    print("="*80)
    print("\nServer will be available at:")
    print(f"  - API: http://{display_host}:{options['port']}")
    print(f"  - Docs: http://{display_host}:{options['port']}/docs")
    print(f"  - Reload: {'on' if options['reload'] else 'off'}")
    print("\nPress CTRL+C to stop the server")
    print("="*80 + "\n")

    uvicorn.run("backend.api.main:app", **options)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='Grade Rank Calculator API server')
    parser.add_argument(
        '--config',
        default=DEFAULT_CONFIG_PATH,
        help='Path to configuration file (default: config/config.yaml)'
    )
    main(parser.parse_args())
