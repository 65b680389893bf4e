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


"""Module for keeping widely used constants"""

import os
import re


class FrameworkConst(object):
    
    FW_NAME = 'berth'
    FW_VERSION = '0.3.0'  # framework version


class Encoding(object):
    
    """Common file encodings"""
    
    UTF_8 = 'UTF-8'
    DEFAULT = UTF_8


class Flag(object):
    
    """Flags for changing a method's behaviour"""
    
    VALIDATION = 'this_method_is_an_argument_validation'
    READY = 'the_lazy_class_must_be_ready_before_using_this_method'


class DateFmt(object):
    
    """Common datetime formats"""
    
    SYSTEM = '%Y%m%d%H%M%S%f'
    READABLE = '%Y-%m-%d %H:%M:%S'


class Extension(object):
    
    """Common file extensions"""
    
    LOG = 'log'


class Regex(object):
    
    """Regular expressions"""
    
    YAML_BREAK = re.compile(r'\n[^- ]')
    LINE_BREAK = re.compile(r'[\r\n]+')
    LEGACY_SOCKET = re.compile(r'^https?://unix:(?P<path>/[^:]+):?$')


class Config(object):
    
    """Name conventions in configuration files and paths"""
    
    FMT = 'yaml'
    EXT = FMT
    FILE = 'berth.{}'.format(EXT)
    LOCAL = os.path.join(os.getcwd(), FILE)
    
    class Namespace(object):
        
        """Namespaces that may be found inside configuration files"""
        
        DOCKER = 'docker'
        LOGGER = 'logger'


class Package(object):
    
    """Paths inside the python package"""
    
    BASE = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
    RESOURCES = os.path.join(BASE, 'resources')
    CONF = os.path.join(RESOURCES, Config.FILE)


class HostUser(object):
    
    """Paths inside the user home on host machines"""
    
    HOME = os.path.expanduser('~')
    BERTH = os.path.join(HOME, '.berth')
    LOG_DIR = os.path.join(BERTH, 'logs')
    CONF = os.path.join(BERTH, Config.FILE)


class LoggerConst(object):
    
    """Constants used when logging"""
    
    DEFAULT_NAME = 'berth'
    FILE_EXT = Extension.LOG
    DEFAULT_DIR = HostUser.LOG_DIR
    PRETTY_FMT = 'yaml'


class DockerConst(object):
    
    """Docker-related nomenclature standards"""
    
    APP_PREFIX = 'app'
    IMAGE_SUFFIX = 'image'
    CONTAINER_PORT = 8080  # port the app listens to inside the container
    HOST_PORT = '3000'
    GRACE_PERIOD = 1  # seconds to wait after a start command
    TAR_CONTENT_TYPE = 'application/tar'
    
    class Scheme(object):
        
        """URI schemes accepted for reaching the Docker daemon"""
        
        HTTP = 'http'
        HTTPS = 'https'
        UNIX = 'unix'
        HTTP_UNIX = 'http+unix'
        MOUNTED = 'http+docker'  # prefix under which the unix socket adapter is mounted
        MOUNTED_BASE = 'http+docker://localhost'
        ALL = [HTTP, HTTPS, UNIX, HTTP_UNIX]
    
    class Endpoint(object):
        
        """Paths in the Docker Engine API"""
        
        BUILD = '/build'
        CREATE = '/containers/create'
        START = '/containers/{}/start'


class ArchiveConst(object):
    
    """Constants related to the build context tarball"""
    
    RECIPE_NAME = 'Dockerfile'
    APP_DIR = 'app'  # directory apps are rooted at, both in the tarball and in the image
    APP_CODE = '/app/index.js'
    APP_MANIFEST = '/app/package.json'
    EMPTY_MANIFEST = '{}'
    FILE_MODE = 0o644
    CHUNK_SIZE = 64*1024
    SPOOL_MAX_SIZE = 16*1024*1024  # bytes kept in memory before spooling to disk
    
    class Kind(object):
        
        """How an entry's data should be read"""
        
        STRING = 'string'
        BUFFER = 'buffer'
        STREAM = 'stream'
        FILE = 'file'
        DIRECTORY = 'directory'
        ALL = [STRING, BUFFER, STREAM, FILE, DIRECTORY]


class RecipeConst(object):
    
    """Recipe used when the caller does not provide a Dockerfile"""
    
    DEFAULT = '\n'.join([
        'FROM node:lts-alpine',
        'COPY /app /app',
        'RUN cd /app; npm install',
        'EXPOSE {}'.format(DockerConst.CONTAINER_PORT),
        'CMD ["node", "/app"]'
    ])
