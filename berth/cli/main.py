# -*- coding: utf-8 -*-

# Copyright Berth Development Team
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


import click
import sys

from berth.api.main import BerthAPI
from berth.cli.handler import CommandHandler as CMD
from berth.common.constants import FrameworkConst
from berth.common.logging import LoggerHub, LOG


@click.group()
@click.option('--log-level', '-l', default='INFO', type=str, help="Level of log verbosity (DEBUG, INFO, WARN, ERROR)")
@click.option('--debug', '-d', default=False, type=bool, is_flag=True, help="Set log level to DEBUG")
@click.option('--pretty', '-p', default=False, type=bool, is_flag=True, help="Less compact, more readable output")
@click.option('--background', '-b', default=False, type=bool, is_flag=True, help="Run in background, only log to files")
@click.pass_context
def berth(_, log_level: str, debug: bool, pretty: bool, background: bool):
    
    """Command line interface for packaging apps into containers"""
    
    if debug:
        log_level = 'DEBUG'
    
    LoggerHub.configure('level', log_level)
    LoggerHub.configure('pretty', pretty)
    LoggerHub.configure('background', background)


@click.command()
@click.argument('app')
@click.option('--uri', '-u', help="Docker daemon address (default: configured docker.uri)")
@click.option('--name', '-n', help="Container name. The image is named '<name>-image' (default: app-<timestamp>)")
@click.option('--port', '-P', help="Host port bound to the container's port 8080 (default: 3000)")
@click.option('--dockerfile', type=click.File('r'), help="Dockerfile to use instead of the default one")
@click.option('--package', type=click.File('r'), help="package.json for the app (ignored for directories)")
@click.option('--no-start', default=False, is_flag=True, help="Create the container but do not start it")
@click.option('--grace-period', type=float, help="Seconds to wait after starting the container")
def dockerize(app, uri, name, port, dockerfile, package, no_start, grace_period):
    
    """Package an app and run it in a container
    
    APP is a path to a file or directory, inline source code, or '-' for reading code from stdin
    """
    
    CMD.run(
        BerthAPI, 'dockerize',
        _api_kwargs=dict(uri=uri),
        app=sys.stdin.buffer if app == '-' else app,
        name=name,
        port=port,
        recipe=dockerfile.read() if dockerfile else None,
        manifest=package.read() if package else None,
        start=not no_start,
        grace_period=grace_period
    )


@click.command()
def version():
    
    """Framework's version"""
    
    LOG.echo("Berth v%s" % FrameworkConst.FW_VERSION)


commands = [
    dockerize,
    version
]

for cmd in commands:
    berth.add_command(cmd)
