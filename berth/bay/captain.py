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


"""Module used to create and start containers"""

import time
from urllib.parse import urlencode

from berth.bay.dock import Dock
from berth.common.constants import DockerConst
from berth.common.errors import RemoteSemanticError
from berth.common.logging import Logged


def default_container_config(image: str, port: str = DockerConst.HOST_PORT):
    
    return {
        'Image': image,
        'HostConfig': {
            'PortBindings': {
                '{}/tcp'.format(DockerConst.CONTAINER_PORT): [{'HostPort': str(port)}]
            }
        }
    }


class Captain(Logged):
    
    def __init__(self, dock: Dock, log=None):
        
        Logged.__init__(self, log=log)
        self.dock = dock
    
    def create(self, name: str, config: dict) -> str:
        
        self.LOG.info("Creating container {}".format(name))
        
        response = self.dock.request(
            '{}?{}'.format(DockerConst.Endpoint.CREATE, urlencode({'name': name})),
            method='POST',
            body=config
        )
        
        cont_id = response.get('Id') if isinstance(response, dict) else None
        
        if not isinstance(cont_id, str) or len(cont_id) == 0:
            raise RemoteSemanticError(
                "Container '{}' was not created".format(name),
                "Response: {}".format(response)
            )
        
        self.LOG.debug("Container {} has id {}".format(name, cont_id))
        return cont_id
    
    def start(self, cont_id: str, grace_period: float = DockerConst.GRACE_PERIOD):
        
        """Starts a container and then waits for the grace period
        
        Waiting does not guarantee that the app inside the container is ready to serve.
        Whoever depends on it should check the connection before using it.
        """
        
        self.LOG.info("Starting container {}".format(cont_id))
        self.dock.request(DockerConst.Endpoint.START.format(cont_id), method='POST')
        
        if grace_period:
            self.LOG.debug("Waiting {} seconds for container {}".format(grace_period, cont_id))
            time.sleep(grace_period)
