# -*- coding: utf-8 -*-

import requests
from click.testing import CliRunner

from berth.cli.main import berth
from berth.common.constants import FrameworkConst
from berth.common.logging import LoggerHub

from conftest import APP_CODE, APP_MANIFEST, untar


def invoke(*args, **kwargs):
    
    try:
        return CliRunner().invoke(berth, list(args), **kwargs)
    finally:
        LoggerHub.configure('background', True)


def test_version():
    
    result = invoke('version')
    
    assert result.exit_code == 0
    assert FrameworkConst.FW_VERSION in result.output


def test_dockerize_file(transport, app_dir, tmp_path):
    
    package = tmp_path / 'package.json'
    package.write_text(APP_MANIFEST)
    
    result = invoke(
        'dockerize', str(app_dir / 'index.js'),
        '--uri', 'http://docker.test',
        '--name', 'hello',
        '--port', '4000',
        '--package', str(package),
        '--grace-period', '0'
    )
    
    assert result.exit_code == 0, result.output
    assert 'c0ffee' in result.output
    
    build, create, start = transport.calls
    assert build.url == 'http://docker.test/build?t=hello-image'
    assert untar(build.body)['app/package.json'] == APP_MANIFEST.encode('utf-8')
    assert create.body['HostConfig']['PortBindings']['8080/tcp'] == [{'HostPort': '4000'}]
    assert start.url.endswith('/containers/c0ffee/start')


def test_dockerize_stdin_without_start(transport, tmp_path):
    
    dockerfile = tmp_path / 'Dockerfile'
    dockerfile.write_text('FROM node:lts-alpine')
    
    result = invoke(
        'dockerize', '-',
        '--uri', 'http://docker.test',
        '--dockerfile', str(dockerfile),
        '--no-start',
        input=APP_CODE
    )
    
    assert result.exit_code == 0, result.output
    assert len(transport.calls) == 2
    
    files = untar(transport.calls[0].body)
    assert files['app/index.js'] == APP_CODE.encode('utf-8')
    assert files['Dockerfile'] == b'FROM node:lts-alpine'


def test_dockerize_unreachable_daemon(transport):
    
    transport.failures['/build'] = requests.ConnectionError("connection refused")
    result = invoke('dockerize', 'console.log(1)', '--uri', 'http://docker.test')
    
    assert result.exit_code == 1
    assert 'TransportError' in result.output
    assert len(transport.calls) == 1


def test_dockerize_negative_grace_period(transport):
    
    result = invoke('dockerize', 'console.log(1)', '--uri', 'http://docker.test', '--grace-period', '-1')
    
    assert result.exit_code == 1
    assert 'BerthValidationError' in result.output
    assert transport.calls == []
    assert transport.closed
