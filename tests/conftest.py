# -*- coding: utf-8 -*-

import io
import json
import tarfile
import tempfile
from collections import namedtuple

import pytest
import requests

from berth.common.logging import LOG

LOG.kwargs['directory'] = tempfile.mkdtemp(prefix='berth-logs-')
LOG.kwargs['background'] = True

APP_CODE = "require('http').createServer((req, res) => res.end('Hello world')).listen(8080);\n"
APP_MANIFEST = '{ "name": "hello", "dependencies": {} }'

Call = namedtuple('Call', ['method', 'url', 'kwargs', 'body'])


class FakeResponse(object):
    
    def __init__(self, status_code=200, payload=None, text=''):
        
        self.status_code = status_code
        self.text = json.dumps(payload) if payload is not None else text
        self.content = self.text.encode('utf-8')
        self.headers = {}
    
    def json(self):
        
        return json.loads(self.text)


class FakeTransport(object):
    
    """Stands in for requests.Session, recording every call made through it"""
    
    def __init__(self, cont_id='c0ffee'):
        
        self.calls = []
        self.mounted = {}
        self.failures = {}
        self.routes = {
            '/build': FakeResponse(text='{"stream":"Step 1/5 : FROM node:lts-alpine"}\n'
                                        '{"stream":"Successfully built 1234"}\n'),
            '/containers/create': FakeResponse(status_code=201, payload={'Id': cont_id, 'Warnings': []}),
            '/start': FakeResponse(status_code=204)
        }
        self.closed = False
    
    def mount(self, prefix, adapter):
        
        self.mounted[prefix] = adapter
    
    def close(self):
        
        self.closed = True
    
    def request(self, method, url, **kwargs):
        
        body = kwargs.get('data', kwargs.get('json'))
        
        if hasattr(body, 'read'):
            body = body.read()
        
        self.calls.append(Call(method, url, kwargs, body))
        
        for fragment, exc in self.failures.items():
            if fragment in url:
                raise exc
        
        for fragment, response in self.routes.items():
            if fragment in url.split('?')[0]:
                return response
        
        return FakeResponse(payload=[])
    
    def find(self, fragment):
        
        return [call for call in self.calls if fragment in call.url]


@pytest.fixture
def transport(monkeypatch):
    
    fake = FakeTransport()
    monkeypatch.setattr(requests, 'Session', lambda: fake)
    return fake


@pytest.fixture
def app_dir(tmp_path):
    
    path = tmp_path / 'app'
    path.mkdir()
    (path / 'index.js').write_text(APP_CODE)
    (path / 'package.json').write_text(APP_MANIFEST)
    (path / 'lib').mkdir()
    (path / 'lib' / 'util.js').write_text('module.exports = {};\n')
    return path


def untar(payload: bytes) -> dict:
    
    """Maps each regular member of a tarball to its content"""
    
    with tarfile.open(fileobj=io.BytesIO(payload), mode='r') as tar:
        return dict([
            (member.name, tar.extractfile(member).read())
            for member in tar.getmembers()
            if member.isfile()
        ])


def member_names(payload: bytes) -> list:
    
    with tarfile.open(fileobj=io.BytesIO(payload), mode='r') as tar:
        return tar.getnames()
