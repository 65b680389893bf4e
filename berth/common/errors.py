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


from berth.common.parser import StructCleaner


class PrettyError(Exception):
    
    @classmethod
    def parse_cause(cls, exc: Exception = None):
        
        if exc.__cause__ is None:
            if len(exc.args) == 1 and isinstance(exc.args[0], Exception):
                exc.__cause__ = exc.args[0]
            else:
                return None
        
        if isinstance(exc.__cause__, cls):
            return exc.__cause__.pretty()
        else:
            return '{}: {}'.format(
                exc.__cause__.__class__.__name__,
                exc.__cause__.__str__()
            )
    
    @classmethod
    def parse_exc(cls, exc: Exception = None):
        
        cause = cls.parse_cause(exc)
        
        dyct = StructCleaner()(dict(
            Error=exc.__class__.__name__,
            Message=str(exc),
            cause=cause
        ))
        
        if isinstance(cause, dict) and cause.get('Message') == dyct.get('Message'):
            _ = dyct.pop('Message', None)
        
        return dyct
    
    def pretty(self):
        
        return self.parse_exc(self)
    
    def __str__(self):
        
        return '; '.join([str(arg) for arg in self.args])


class ConfigurationError(PrettyError):
    
    pass


class InputResolutionError(PrettyError):
    
    pass


class ArchiveError(PrettyError):
    
    pass


class TransportError(PrettyError):
    
    pass


class RemoteSemanticError(PrettyError):
    
    pass


class BerthValidationError(PrettyError):
    
    pass


class MisusageError(PrettyError):
    
    pass
