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


"""
This module helps with configuration resolutions

Values set explicitly by the caller take precedence over the configuration files,
which are layered as: packaged defaults < user home < current working directory.
"""

import os

from berth.common.annotations import Configured
from berth.common.conf import LazyConf, DockerConf, LoggerConf
from berth.common.constants import ArchiveConst, DockerConst, Encoding, LoggerConst
from berth.common.errors import ConfigurationError
from berth.common.parser import resolve_log_level


class Compass(Configured):
    
    conf: LazyConf = None
    
    def __init__(self, custom_conf: dict = None):
        
        self.conf.get('')  # triggering conf load
        
        if custom_conf is not None:
            self.conf = self.conf.load().as_dict().copy()
            self.conf.update(custom_conf)


class DockerCompass(Compass):
    
    conf = DockerConf
    
    KEY_URI = 'uri'
    KEY_TRANSPORT = 'transport'
    KEY_GRACE_PERIOD = 'grace_period'
    KEY_RECIPE_NAME = 'recipe_name'
    
    @property
    def uri(self):
        
        return self.conf.get(self.KEY_URI)
    
    @property
    def transport(self) -> dict:
        
        transport = self.conf.get(self.KEY_TRANSPORT) or {}
        
        if not isinstance(transport, dict):
            raise ConfigurationError("Transport options must be a mapping, but are: {}".format(type(transport)))
        
        return transport
    
    @property
    def grace_period(self):
        
        period = self.conf.get(self.KEY_GRACE_PERIOD, DockerConst.GRACE_PERIOD)
        
        if isinstance(period, bool) or not isinstance(period, (int, float)) or period < 0:
            raise ConfigurationError("Grace period must be a non negative number of seconds, but is: {}"
                                     .format(period))
        
        return period
    
    @property
    def recipe_name(self):
        
        return self.conf.get(self.KEY_RECIPE_NAME) or ArchiveConst.RECIPE_NAME


class LoggerCompass(Compass):
    
    conf = LoggerConf
    
    KEY_NAME = 'name'
    KEY_LVL = 'level'
    KEY_DIR = 'directory'
    KEY_MAX_BYTES = 'max_bytes'
    KEY_BKP_COUNT = 'bkp_count'
    
    @property
    def name(self):
        
        return self.conf.get(self.KEY_NAME, LoggerConst.DEFAULT_NAME)
    
    @property
    def lvl(self):
        
        return resolve_log_level(self.conf[self.KEY_LVL])
    
    @property
    def max_bytes(self):
        
        return self.conf[self.KEY_MAX_BYTES]
    
    @property
    def bkp_count(self):
        
        return self.conf[self.KEY_BKP_COUNT]
    
    @property
    def log_file_dir(self):
        
        return os.path.expanduser(self.conf.get(self.KEY_DIR) or LoggerConst.DEFAULT_DIR)
    
    @property
    def log_file_name(self):
        
        return '{}.{}'.format(self.name, LoggerConst.FILE_EXT)
    
    @property
    def path_to_log_file(self):
        
        return os.path.join(self.log_file_dir, self.log_file_name)
    
    @property
    def file_handler_kwargs(self):
        
        return dict(
            filename=self.path_to_log_file,
            maxBytes=self.max_bytes,
            backupCount=self.bkp_count,
            encoding=Encoding.UTF_8
        )
