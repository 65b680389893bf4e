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


"""Module for talking to the Docker Engine API over HTTP(S) or a unix socket"""

import requests
from docker.transport import UnixHTTPAdapter
from urllib.parse import urlparse, unquote

from berth.common.constants import DockerConst, Regex
from berth.common.errors import ConfigurationError, TransportError
from berth.common.logging import Logged
from berth.common.parser import join_dicts


TRANSPORT_KEYS = ('cert', 'key', 'ca', 'verify', 'timeout', 'headers', 'proxies')
CALL_KEYS = ('method', 'json', 'headers', 'body', 'params', 'result')


def merge_options(call_options: dict, instance_options: dict) -> dict:
    
    """Returns a new dict with the call's options overwritten by the instance's.
    
    Instance settings always win for keys present in both, so a call cannot
    redirect a request to another endpoint or drop the configured TLS settings.
    """
    
    return join_dicts(call_options or {}, instance_options or {}, allow_overwrite=True)


def parse_uri(uri: str):
    
    """Splits a daemon address into (base_url, socket_path)
    
    Accepted forms:
        http://hostname[:port]
        https://hostname[:port]
        unix:///var/run/docker.sock
        http+unix:///var/run/docker.sock
        http://unix:/var/run/docker.sock:
    """
    
    if not isinstance(uri, str) or len(uri.strip()) == 0:
        raise ConfigurationError("Docker URI is required")
    
    uri = uri.strip()
    legacy = Regex.LEGACY_SOCKET.match(uri)
    
    if legacy is not None:
        return DockerConst.Scheme.MOUNTED_BASE, legacy.group('path')
    
    parsed = urlparse(uri)
    
    if parsed.scheme in (DockerConst.Scheme.UNIX, DockerConst.Scheme.HTTP_UNIX):
        socket_path = unquote(parsed.netloc) + parsed.path
        
        if len(socket_path) == 0:
            raise ConfigurationError("No socket path in Docker URI '{}'".format(uri))
        
        return DockerConst.Scheme.MOUNTED_BASE, socket_path
    elif parsed.scheme in (DockerConst.Scheme.HTTP, DockerConst.Scheme.HTTPS) and parsed.netloc:
        return uri.rstrip('/'), None
    else:
        raise ConfigurationError(
            "Unsupported Docker URI '{}'. Expected one of the schemes: {}"
            .format(uri, DockerConst.Scheme.ALL)
        )


class Dock(Logged):
    
    """Issues requests against a single Docker daemon
    
    :param uri: address of the daemon (see parse_uri)
    :param transport: options applied to every request. Accepted keys are
        cert, key: client certificate and private key files for TLS
        ca: CA bundle for verifying the daemon's certificate (same as verify)
        verify, timeout, headers, proxies: passed through to requests
    """
    
    def __init__(self, uri: str = None, log=None, **transport):
        
        Logged.__init__(self, log=log)
        unknown = [key for key in transport.keys() if key not in TRANSPORT_KEYS]
        
        if unknown:
            raise ConfigurationError(
                "Unknown transport options: {}. Expected any of: {}"
                .format(unknown, list(TRANSPORT_KEYS))
            )
        
        self.base_url, self.socket_path = parse_uri(uri)
        self.options = join_dicts(dict(uri=self.base_url), transport)
        self.session = requests.Session()
        
        if self.socket_path is not None:
            self.session.mount(
                '{}://'.format(DockerConst.Scheme.MOUNTED),
                UnixHTTPAdapter('{}://{}'.format(DockerConst.Scheme.HTTP_UNIX, self.socket_path))
            )
    
    def close(self):
        
        self.session.close()
    
    def __enter__(self):
        
        return self
    
    def __exit__(self, *_):
        
        self.close()
    
    @staticmethod
    def make_request_kwargs(options: dict) -> dict:
        
        kwargs = dict(
            headers=options.get('headers'),
            params=options.get('params'),
            timeout=options.get('timeout'),
            proxies=options.get('proxies')
        )
        
        if options.get('cert') is not None:
            kwargs['cert'] = options['cert'] if options.get('key') is None else (options['cert'], options['key'])
        
        if options.get('ca') is not None:
            kwargs['verify'] = options['ca']
        elif options.get('verify') is not None:
            kwargs['verify'] = options['verify']
        
        body = options.get('body')
        
        if body is not None:
            kwargs['json' if options.get('json', True) else 'data'] = body
        
        return dict([(k, v) for k, v in kwargs.items() if v is not None])
    
    @staticmethod
    def parse_body(response: requests.Response, as_json: bool = True):
        
        if not as_json:
            return response.text
        elif len(response.content or b'') == 0:
            return None
        
        try:
            return response.json()
        except ValueError:
            return response.text
    
    def request(self, path: str, **options):
        
        """Sends a request to the daemon and returns the response's body
        
        :param path: suffix appended to the daemon's base URL (e.g.: /containers/json)
        :param options: per call options. Accepted keys are
            method: HTTP verb (GET by default)
            json: encode the body and decode the response as JSON (True by default)
            headers, params: passed through to requests
            body: the request body
            result: return the whole requests.Response instead of the body
        
        Status codes are not interpreted. Only failures to exchange a request and a response
        (connection refused, timeouts, DNS failures) are raised, as TransportError.
        """
        
        unknown = [key for key in options.keys() if key not in CALL_KEYS + TRANSPORT_KEYS]
        
        if unknown:
            raise TypeError("Unexpected request options: {}".format(unknown))
        
        options = merge_options(options, self.options)
        method = options.get('method') or 'GET'
        url = '{}{}'.format(options['uri'], path)
        self.LOG.debug("{} {}".format(method, url))
        
        try:
            response = self.session.request(method, url, **self.make_request_kwargs(options))
        except requests.RequestException as e:
            raise TransportError("{} {} failed".format(method, url)) from e
        
        if options.get('result', False):
            return response
        else:
            return self.parse_body(response, as_json=options.get('json', True))
    
    def get(self, path: str, **options):
        
        return self.request(path, method='GET', **options)
    
    def post(self, path: str, **options):
        
        return self.request(path, method='POST', **options)
    
    def delete(self, path: str, **options):
        
        return self.request(path, method='DELETE', **options)
