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


"""Module for handling Docker images"""

from typing import BinaryIO
from urllib.parse import urlencode

from berth.bay.dock import Dock
from berth.common.constants import DockerConst, Regex
from berth.common.logging import Logged


def image_name(name: str):
    
    return '{}-{}'.format(name, DockerConst.IMAGE_SUFFIX)


class Shipyard(Logged):
    
    def __init__(self, dock: Dock, log=None):
        
        Logged.__init__(self, log=log)
        self.dock = dock
    
    def build(self, archive: BinaryIO, image: str):
        
        """Sends a build context to the daemon, tagging the resulting image
        
        The body is the raw tarball. The response is a stream of progress messages,
        which is returned as text and only echoed to the debug log.
        """
        
        self.LOG.info("Building image {}".format(image))
        
        logs = self.dock.request(
            '{}?{}'.format(DockerConst.Endpoint.BUILD, urlencode({'t': image})),
            method='POST',
            json=False,
            headers={'Content-Type': DockerConst.TAR_CONTENT_TYPE},
            body=archive
        )
        
        self.print_logs(logs)
        return logs
    
    def print_logs(self, logs):
        
        for line in Regex.LINE_BREAK.split(logs or ''):
            if line.strip():
                self.LOG.debug(line.strip())
