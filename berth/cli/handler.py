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


import sys

from berth.common.errors import PrettyError
from berth.common.logging import LOG
from berth.common.parser import StructCleaner


class CommandHandler(object):
    
    struct_cleaner = StructCleaner(nones=[None])
    
    @classmethod
    def run(cls, _api_cls, _method, _api_kwargs: dict = None, _error_callback=None, _response_callback=None,
            **method_kwargs):
        
        code, error = 0, None
        
        try:
            with _api_cls(**cls.struct_cleaner(_api_kwargs or {})) as api:
                response = getattr(api, _method)(**cls.struct_cleaner(method_kwargs))
            
            cls.show_response(response, _response_callback)
        except Exception as e:
            error = e
            code = 1
            cls.show_exception(e, _error_callback)
        finally:
            if LOG.debug_mode and error is not None:
                raise error
            else:
                sys.exit(code)
    
    @classmethod
    def show_response(cls, response, callback=None):
        
        if callable(callback):
            response = callback(response)
        
        if response is not None:
            LOG.echo(response)
    
    @classmethod
    def show_exception(cls, exception, callback=None):
        
        if isinstance(exception, PrettyError):
            exc = exception.pretty()
        else:
            exc = PrettyError.parse_exc(exception)
        
        if callable(callback):
            detail = callback(exception)
            LOG.info(detail)
        
        LOG.error(exc)


CMD = CommandHandler()
