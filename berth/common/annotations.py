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


from abc import ABC, abstractmethod
from functools import wraps
from pyvalid import accepts, ArgumentValidationError
from pyvalid.validators import is_validator
from typing import Type

from berth.common.constants import Flag
from berth.common.errors import MisusageError, BerthValidationError


def validation(func):
    
    setattr(func, Flag.VALIDATION, True)
    return func


def ready(func):
    
    setattr(func, Flag.READY, True)
    return func


def validate(**kwargs):
    
    checker = accepts(object, **dict([
        (key, val if not getattr(val, Flag.VALIDATION, False) else wrap_validation(key, val))
        for key, val in kwargs.items()
    ]))
    
    def decorator(func):
        
        checked = checker(func)
        
        @wraps(func)
        def wrapper(*args, **kw):
            
            try:
                return checked(*args, **kw)
            except ArgumentValidationError as e:
                raise BerthValidationError("Invalid arguments for '{}'".format(func.__name__)) from e
        
        return wrapper
    
    return decorator


class Configured(object):
    
    """Holder of a class level conf dict, shared by every instance
    
    Subclasses either declare conf or have it assigned once, before the first instance reads it.
    """
    
    conf: dict = None


class Lazy(ABC):
    
    ready = False
    
    _LAZY_PROPERTIES = []
    
    @abstractmethod
    def setup(self):
        
        pass
    
    def __getattribute__(self, attr_name):
        
        if attr_name in super().__getattribute__('_LAZY_PROPERTIES') and not self.ready:
            self.setup()
            self.ready = True
        
        attr = super().__getattribute__(attr_name)
        
        if getattr(attr, Flag.READY, False) and not self.ready:
            self.setup()
            self.ready = True
        
        return attr


def wrap_validation(arg_name, func):
    
    @is_validator
    def wrapper(*args, **kwargs):
        
        try:
            return func(*args, **kwargs)
        except Exception as e:
            message = "Argument '{}' reproved on validation '{}'".format(arg_name, func.__name__)
            raise BerthValidationError(message) from e
    
    return wrapper


class Validation(object):
    
    def __init__(self):
        
        raise MisusageError("Validation use should be static. Do not instantiate it")


class Validated(object):
    
    valid: Type[Validation] = None
