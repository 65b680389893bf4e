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


"""Module for the named pieces of data that go into a build context"""

import io
import os
import tarfile
import time
from abc import ABC, abstractmethod
from tempfile import SpooledTemporaryFile
from typing import BinaryIO

from berth.common.constants import ArchiveConst, Encoding
from berth.common.errors import ArchiveError
from berth.common.parser import assert_bytes


def scrub_tarinfo(info: tarfile.TarInfo):
    
    """Drops host-specific ownership so the same sources yield the same headers"""
    
    info.uid = info.gid = 0
    info.mtime = int(info.mtime)
    info.uname = info.gname = ''
    return info


class Entry(ABC):
    
    """A named unit of data to be added to an archive
    
    The name is a path-like string (e.g.: /app/index.js). Tar members are always relative,
    so the leading slash is dropped when the entry is packed.
    """
    
    kind: str = None
    
    def __init__(self, name: str, data):
        
        if not isinstance(name, str) or len(name.strip('/')) == 0:
            raise ArchiveError("Entry name must be a non empty path, but is: {}".format(name))
        
        self.name = name
        self.data = data
    
    @property
    def arcname(self):
        
        return self.name.lstrip('/')
    
    def make_tarinfo(self, size: int, mtime: float = None):
        
        info = tarfile.TarInfo(name=self.arcname)
        info.size = size
        info.mode = ArchiveConst.FILE_MODE
        info.mtime = int(time.time() if mtime is None else mtime)
        return scrub_tarinfo(info)
    
    @abstractmethod
    def pack(self, tar: tarfile.TarFile, mtime: float = None):
        
        pass
    
    def __repr__(self):
        
        return "{}(name='{}')".format(self.__class__.__name__, self.name)


class BufferEntry(Entry):
    
    kind = ArchiveConst.Kind.BUFFER
    
    @property
    def payload(self) -> bytes:
        
        return assert_bytes(self.data)
    
    def pack(self, tar: tarfile.TarFile, mtime: float = None):
        
        payload = self.payload
        tar.addfile(self.make_tarinfo(len(payload), mtime), io.BytesIO(payload))


class StringEntry(BufferEntry):
    
    kind = ArchiveConst.Kind.STRING
    
    @property
    def payload(self) -> bytes:
        
        if not isinstance(self.data, str):
            raise ArchiveError("Entry '{}' expected a str, got {}".format(self.name, type(self.data)))
        
        return self.data.encode(Encoding.UTF_8)


class StreamEntry(Entry):
    
    """Entry whose data is a readable file-like object
    
    Tar headers carry the member size, so the stream is drained chunk by chunk into a spooled
    buffer first (in memory while small, on disk otherwise) and then copied into the archive.
    Text streams are encoded as UTF-8.
    """
    
    kind = ArchiveConst.Kind.STREAM
    
    def drain(self, spool: BinaryIO):
        
        size = 0
        
        while True:
            try:
                chunk = self.data.read(ArchiveConst.CHUNK_SIZE)
            except ValueError as e:  # closed or detached
                raise ArchiveError("Could not read stream of entry '{}'".format(self.name)) from e

            if not chunk:
                break
            
            chunk = assert_bytes(chunk)
            spool.write(chunk)
            size += len(chunk)
        
        return size
    
    def pack(self, tar: tarfile.TarFile, mtime: float = None):
        
        if not callable(getattr(self.data, 'read', None)):
            raise ArchiveError("Entry '{}' expected a readable stream, got {}".format(self.name, type(self.data)))
        
        with SpooledTemporaryFile(max_size=ArchiveConst.SPOOL_MAX_SIZE) as spool:
            size = self.drain(spool)
            spool.seek(0)
            tar.addfile(self.make_tarinfo(size, mtime), spool)


class FileEntry(Entry):
    
    kind = ArchiveConst.Kind.FILE
    
    @property
    def path(self):
        
        return os.fspath(self.data)
    
    def pack(self, tar: tarfile.TarFile, mtime: float = None):
        
        with open(self.path, 'rb') as f:
            info = scrub_tarinfo(tar.gettarinfo(arcname=self.arcname, fileobj=f))
            tar.addfile(info, f)


class DirectoryEntry(FileEntry):
    
    """Entry for a directory tree, walked recursively and in sorted order"""
    
    kind = ArchiveConst.Kind.DIRECTORY
    
    def pack(self, tar: tarfile.TarFile, mtime: float = None):
        
        if not os.path.isdir(self.path):
            raise NotADirectoryError("No such directory: '{}'".format(self.path))
        
        tar.add(self.path, arcname=self.arcname, recursive=True, filter=scrub_tarinfo)


def get_entry_class(kind: str):
    
    try:
        return {
            ArchiveConst.Kind.STRING: StringEntry,
            ArchiveConst.Kind.BUFFER: BufferEntry,
            ArchiveConst.Kind.STREAM: StreamEntry,
            ArchiveConst.Kind.FILE: FileEntry,
            ArchiveConst.Kind.DIRECTORY: DirectoryEntry
        }[kind]
    except KeyError:
        raise ArchiveError("Unknown entry kind '{}'. Expected one of: {}".format(kind, ArchiveConst.Kind.ALL))


def make_entry(name: str, data, kind: str) -> Entry:
    
    return get_entry_class(kind)(name=name, data=data)
