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


import os
from collections import namedtuple
from datetime import datetime

from berth.common.annotations import Validation, validation
from berth.common.constants import ArchiveConst, DateFmt, DockerConst
from berth.common.errors import InputResolutionError
from berth.common.logging import LOG


class AppInput(namedtuple('AppInput', ['kind', 'data'])):
    
    """An app whose kind is already known, so no sniffing is needed
    
    Kind is one of ArchiveConst.Kind.ALL. For kinds file and directory, data is a path.
    """
    
    def __new__(cls, kind: str, data):
        
        if kind not in ArchiveConst.Kind.ALL:
            raise InputResolutionError("Unknown app kind '{}'. Expected one of: {}".format(kind, ArchiveConst.Kind.ALL))
        
        return super().__new__(cls, kind, data)
    
    @classmethod
    def from_string(cls, code: str):
        
        return cls(ArchiveConst.Kind.STRING, code)
    
    @classmethod
    def from_buffer(cls, buffer: bytes):
        
        return cls(ArchiveConst.Kind.BUFFER, buffer)
    
    @classmethod
    def from_stream(cls, stream):
        
        return cls(ArchiveConst.Kind.STREAM, stream)
    
    @classmethod
    def from_path(cls, path):
        
        kind = stat_path(path)
        
        if kind is None:
            raise InputResolutionError("Path not found: {}".format(path))
        
        return cls(kind, os.fspath(path))


def stat_path(path):
    
    """Returns the kind of entry a path points to, or None if it cannot be statted"""
    
    if os.path.isdir(path):
        return ArchiveConst.Kind.DIRECTORY
    elif os.path.exists(path):
        return ArchiveConst.Kind.FILE
    else:
        return None


class AppResolver(object):
    
    """Tells apart the kinds of input accepted as an app
    
    bytes-like objects are buffers, path-like objects are files or directories,
    readable objects are streams. A str is first tried as a path and, if nothing
    exists there, taken as the app's source code. Beware that a mistyped path is
    silently deployed as code.
    """
    
    def __call__(self, app) -> AppInput:
        
        if isinstance(app, AppInput):
            return app
        elif isinstance(app, (bytes, bytearray, memoryview)):
            return AppInput.from_buffer(app)
        elif isinstance(app, os.PathLike):
            return AppInput.from_path(app)
        elif isinstance(app, str):
            return self.resolve_str(app)
        elif callable(getattr(app, 'read', None)):
            return AppInput.from_stream(app)
        else:
            raise InputResolutionError("Cannot dockerize an app of type {}".format(type(app)))
    
    def resolve_str(self, app: str) -> AppInput:
        
        kind = stat_path(app)
        
        if kind is None:
            LOG.debug("No file or directory found at the given reference. Taking it as source code")
            return AppInput.from_string(app)
        else:
            LOG.debug("Resolved app as a {} at {}".format(kind, app))
            return AppInput(kind, app)


def make_app_name(now: datetime = None):
    
    return '{}-{}'.format(DockerConst.APP_PREFIX, (now or datetime.now()).strftime(DateFmt.SYSTEM))


class DefaultValidation(Validation):
    
    @classmethod
    @validation
    def non_empty_str(cls, x):
        
        if not isinstance(x, str) or len(x) == 0:
            raise ValueError("Must be a non empty string")
        
        return True
    
    @classmethod
    @validation
    def port(cls, x):
        
        if isinstance(x, bool) or not isinstance(x, (str, int)) or len(str(x).strip()) == 0:
            raise ValueError("Must be a port number, as int or str")
        
        return True
    
    @classmethod
    @validation
    def grace_period(cls, x):
        
        if isinstance(x, bool) or not isinstance(x, (int, float)) or x < 0:
            raise ValueError("Must be a non negative number of seconds")
        
        return True


def _or_none(cls, method_name):
    
    @validation
    def wrapper(kls, x=None):
        if x is None:
            return True
        else:
            return getattr(kls, method_name)(x)
    
    wrapper.__name__ = method_name + '_or_none'
    setattr(cls, method_name + '_or_none', classmethod(wrapper))


_or_none(DefaultValidation, 'non_empty_str')
_or_none(DefaultValidation, 'port')
_or_none(DefaultValidation, 'grace_period')
