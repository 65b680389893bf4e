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


"""Python API for packaging apps into images and launching them as containers"""

from berth.api.utils import AppInput, AppResolver, DefaultValidation, make_app_name
from berth.bay.barrel import build_archive
from berth.bay.captain import Captain, default_container_config
from berth.bay.cargo import DirectoryEntry, StringEntry, make_entry
from berth.bay.compass import DockerCompass
from berth.bay.dock import Dock
from berth.bay.shipyard import Shipyard, image_name
from berth.common.annotations import Validated, validate
from berth.common.constants import ArchiveConst, DockerConst, RecipeConst
from berth.common.errors import BerthValidationError
from berth.common.logging import Logged
from berth.common.parser import assert_json, join_dicts


class BerthAPI(Validated, Logged):
    
    """Entry point for dockerizing apps against a Docker daemon
    
    :param uri: the daemon's address (e.g.: unix:///var/run/docker.sock, https://hostname:2376).
        Falls back to the configured docker.uri
    :param grace_period: seconds to wait after starting a container. Falls back to the
        configured docker.grace_period
    :param transport: options applied to every request (see berth.bay.dock.Dock)
    """
    
    valid = DefaultValidation
    
    def __init__(self, uri: str = None, grace_period: float = None, **transport):
        
        Logged.__init__(self)
        
        try:
            self.valid.grace_period_or_none(grace_period)
        except ValueError as e:
            raise BerthValidationError("Argument 'grace_period' reproved on validation") from e
        
        compass = DockerCompass()
        self.dock = Dock(
            uri or compass.uri,
            **join_dicts(compass.transport, transport, allow_overwrite=True)
        )
        self.grace_period = compass.grace_period if grace_period is None else grace_period
        self.recipe_name = compass.recipe_name
        self.resolver = AppResolver()
        self.shipyard = Shipyard(self.dock)
        self.captain = Captain(self.dock)
    
    def close(self):
        
        self.dock.close()
    
    def __enter__(self):
        
        return self
    
    def __exit__(self, *_):
        
        self.close()
    
    def request(self, path: str, **options):
        
        return self.dock.request(path, **options)
    
    def make_entries(self, app: AppInput, manifest=None):
        
        if app.kind == ArchiveConst.Kind.DIRECTORY:
            if manifest is not None:
                self.LOG.warn("Ignoring the given manifest. Apps in directories must provide their own")
            
            return [DirectoryEntry(ArchiveConst.APP_DIR, app.data)]
        
        if isinstance(manifest, dict):
            manifest = assert_json(manifest)
        
        return [
            make_entry(ArchiveConst.APP_CODE, app.data, app.kind),
            StringEntry(ArchiveConst.APP_MANIFEST, manifest or ArchiveConst.EMPTY_MANIFEST)
        ]
    
    @validate(
        name=DefaultValidation.non_empty_str_or_none,
        port=DefaultValidation.port_or_none,
        recipe=(str, None),
        manifest=(str, dict, None),
        start=(bool, None),
        container=(dict, None),
        grace_period=DefaultValidation.grace_period_or_none
    )
    def dockerize(self, app, name: str = None, port=None, recipe: str = None, manifest=None, start: bool = True,
                  container: dict = None, grace_period: float = None) -> str:
        
        """Packages an app into an image and runs it as a container
        
        :param app: source code (str, bytes or a readable stream), a path to a file or a path to a directory.
            A str that does not point to an existing file or directory is taken as source code.
            Code goes to /app/index.js inside the image. A directory is copied to /app as it is
        :param name: container name. The image is named after it as '<name>-image'. Defaults to app-<timestamp>
        :param port: host port bound to the container's port 8080. Defaults to '3000'
        :param recipe: Dockerfile as a str. Defaults to RecipeConst.DEFAULT
        :param manifest: package.json content (str or dict), used along with code. Ignored for directories
        :param start: whether to start the container after creating it
        :param container: container configuration, sent as it is instead of the default one.
            It must then specify the image and port bindings by itself
        :param grace_period: seconds to wait after starting the container. It does not ensure the app is ready
        :returns: the container's id
        """
        
        name = name or make_app_name()
        recipe = recipe or RecipeConst.DEFAULT
        image = image_name(name)
        
        entries = self.make_entries(self.resolver(app), manifest=manifest)
        archive = build_archive(recipe, entries, recipe_name=self.recipe_name)
        
        try:
            self.shipyard.build(archive, image)
        finally:
            archive.close()
        
        if container is None:
            container = default_container_config(image, str(port or DockerConst.HOST_PORT))
        
        cont_id = self.captain.create(name, container)
        
        if start is not False:
            self.captain.start(cont_id, grace_period=self.grace_period if grace_period is None else grace_period)
        
        return cont_id
