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


import json
import logging
from collections import OrderedDict
from datetime import datetime

from berth.common.constants import Encoding, DateFmt, Regex


class StructCleaner(object):
    
    def __init__(self, depth=1, nones: list = None):
        
        self.depth = depth
        self.nones = nones or [None, [], {}, (), '']
    
    def __call__(self, x, _depth=5):
        
        if isinstance(x, (dict, OrderedDict)) and _depth > 0:
            return self.clear_dict(x, _depth - 1)
        elif isinstance(x, (list, tuple)):
            return self.clear_list(x, _depth - 1)
        else:
            return x
    
    def clear_dict(self, x, _depth: int):
        
        out = dict()
        
        for k, v in x.items():
            v = self(v, _depth=_depth)
            
            if v not in self.nones:
                out[k] = v
        
        return dict(out)
    
    def clear_list(self, x, _depth: int):
        
        out = []
        
        for v in x:
            v = self(v, _depth=_depth)
            
            if v not in self.nones:
                out.append(v)
        
        return out


def order_yaml(yaml: str):
    
    index = [0] + [i.start() for i in Regex.YAML_BREAK.finditer(yaml)] + [None]
    parts = [yaml[index[i]:index[i+1]].strip() for i in range(len(index)-1)]
    pairs = sorted([(len(p), p) for p in parts], key=lambda p: p[0])
    return '\n'.join([p[1] for p in pairs])


def join_dicts(parent_dyct, child_dyct, allow_overwrite=False):
    
    """Returns a new dict with the child's keys applied over a copy of the parent"""
    
    dyct = dict(parent_dyct or {})
    
    for k, v in (child_dyct or {}).items():
        if k in dyct and not allow_overwrite:
            raise KeyError("Duplicated dict key: {}".format(k))
        
        dyct[k] = v
    
    return dyct


def assert_json(x, depth=0, indent=None, encode=False, encoding=Encoding.DEFAULT):
    
    if isinstance(x, list):
        x = [assert_json(y, depth + 1) for y in x]
    elif isinstance(x, dict):
        x = dict([(k, assert_json(v, depth + 1)) for k, v in x.items()])
    elif isinstance(x, datetime):
        x = x.strftime(DateFmt.READABLE)
    if depth == 0:
        x = json.dumps(x, indent=indent, ensure_ascii=False)
        return x if not encode else x.encode(encoding)
    else:
        return x


def assert_str(x, encoding=Encoding.UTF_8, allow_none=False, allow_empty=True):
    
    if x is None:
        if allow_none and allow_empty:
            return ''
        else:
            raise TypeError("Cannot coerce None to str")
    
    if isinstance(x, bytes):
        x = x.decode(encoding)
    
    elif not isinstance(x, str):
        x = str(x)
    
    if len(x) == 0 and not allow_empty:
        raise ValueError("Expected a non empty str")
    
    return x


def assert_bytes(x, encoding=Encoding.UTF_8):
    
    if isinstance(x, bytes):
        return x
    elif isinstance(x, (bytearray, memoryview)):
        return bytes(x)
    elif isinstance(x, str):
        return x.encode(encoding)
    else:
        raise TypeError("Cannot coerce {} to bytes".format(type(x)))


def resolve_log_level(lvl: (str, int)):
    
    if isinstance(lvl, int):
        return lvl
    elif isinstance(lvl, str):
        return getattr(logging, lvl.strip().upper())
    else:
        raise TypeError("Cannot resolve log level from reference '{}' of type {}".format(lvl, type(lvl)))
