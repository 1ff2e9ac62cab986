"""
Command-line runner for local development.

Starts one of the services on the Flask development server. In a cluster,
use a WSGI server against ``kubdemo.<service>.wsgi:application`` instead.

.. code-block:: bash

   $ kubdemo run auth --port 8000
   $ AUTH_ADDRESS=localhost:8000 kubdemo run users --port 8001
   $ AUTH_ADDRESS=localhost:8000 TASKS_FOLDER=/tmp/tasks \\
       kubdemo run tasks --port 8002
   $ kubdemo run router --port 8080

"""

from importlib import import_module

import click

SERVICES = {
    'auth': 8000,
    'users': 8001,
    'tasks': 8002,
    'router': 8080,
}


@click.group()
def cli() -> None:
    """Run the kub-demo services."""


@cli.command()
@click.argument('service', type=click.Choice(sorted(SERVICES)))
@click.option('--host', default='127.0.0.1', show_default=True)
@click.option('--port', type=int, default=None,
              help='Defaults to the usual port for the service.')
@click.option('--debug', is_flag=True, default=False)
def run(service: str, host: str, port: int, debug: bool) -> None:
    """Run SERVICE on the development server."""
    factory = import_module(f'kubdemo.{service}.factory')
    app = factory.create_app()
    app.run(host=host, port=port or SERVICES[service], debug=debug)


if __name__ == '__main__':
    cli()
