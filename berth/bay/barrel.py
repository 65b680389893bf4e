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


"""Module for assembling build contexts as tar archives"""

import tarfile
import time
from tempfile import SpooledTemporaryFile
from typing import BinaryIO, List

from berth.bay.cargo import Entry, StringEntry
from berth.common.constants import ArchiveConst
from berth.common.errors import ArchiveError
from berth.common.logging import Logged


class Barrel(Logged):
    
    """Packs a recipe and a list of entries into a single tar archive
    
    The archive is written to a spooled temporary file, which stays in memory while small
    and rolls over to disk otherwise. It is only handed over to the caller once every entry
    has been packed, so a failure never leaves the caller with a truncated archive.
    """
    
    def __init__(self, recipe_name: str = ArchiveConst.RECIPE_NAME, log=None):
        
        Logged.__init__(self, log=log)
        self.recipe_name = recipe_name
    
    def pack(self, recipe: str, entries: List[Entry] = None, mtime: float = None) -> BinaryIO:
        
        mtime = time.time() if mtime is None else mtime
        entries = list(entries or []) + [StringEntry(name=self.recipe_name, data=recipe)]
        archive = SpooledTemporaryFile(max_size=ArchiveConst.SPOOL_MAX_SIZE)
        
        try:
            with tarfile.open(fileobj=archive, mode='w') as tar:
                for entry in entries:
                    self.pack_entry(tar, entry, mtime)
        except Exception:
            archive.close()
            raise
        
        self.LOG.debug("Archive ready with {} entries ({} bytes)".format(len(entries), archive.tell()))
        archive.seek(0)
        return archive
    
    def pack_entry(self, tar: tarfile.TarFile, entry: Entry, mtime: float):
        
        if not isinstance(entry, Entry):
            raise ArchiveError("Expected an Entry, got {}".format(type(entry)))
        
        self.LOG.debug("Packing {} entry '{}'".format(entry.kind, entry.name))
        
        try:
            entry.pack(tar, mtime=mtime)
        except ArchiveError:
            raise
        except (OSError, TypeError, UnicodeError) as e:
            raise ArchiveError("Failed to pack {} entry '{}'".format(entry.kind, entry.name)) from e


def build_archive(recipe: str, entries: List[Entry] = None, recipe_name: str = ArchiveConst.RECIPE_NAME,
                  mtime: float = None) -> BinaryIO:
    
    """Returns a rewound binary file with the entries plus the recipe, which is appended last.
    
    The caller is responsible for closing the returned file.
    """
    
    return Barrel(recipe_name=recipe_name).pack(recipe, entries, mtime=mtime)
