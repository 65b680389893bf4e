# -*- coding: utf-8 -*-

import io
import os
import tarfile

import pytest

from berth.bay.barrel import Barrel, build_archive
from berth.bay.cargo import (BufferEntry, DirectoryEntry, FileEntry, StreamEntry, StringEntry, make_entry)
from berth.common.constants import ArchiveConst, RecipeConst
from berth.common.errors import ArchiveError

from conftest import APP_CODE, APP_MANIFEST, member_names, untar


class ChunkyStream(object):
    
    """A stream that hands out at most a few bytes per read and remembers each read size"""
    
    def __init__(self, payload: bytes, chunk: int = 7):
        
        self.buffer = io.BytesIO(payload)
        self.chunk = chunk
        self.reads = []
    
    def read(self, size=-1):
        
        self.reads.append(size)
        return self.buffer.read(min(size, self.chunk) if size and size > 0 else self.chunk)


class BrokenStream(object):
    
    def read(self, size=-1):
        
        raise IOError("connection reset")


def test_recipe_is_appended_last():
    
    entries = [StringEntry('/app/index.js', APP_CODE), StringEntry('/app/package.json', '{}')]
    
    with build_archive(RecipeConst.DEFAULT, entries) as archive:
        names = member_names(archive.read())
    
    assert names == ['app/index.js', 'app/package.json', 'Dockerfile']


def test_recipe_only():
    
    with build_archive('FROM scratch') as archive:
        files = untar(archive.read())
    
    assert files == {'Dockerfile': b'FROM scratch'}


def test_custom_recipe_name():
    
    with build_archive('FROM scratch', recipe_name='Containerfile') as archive:
        assert member_names(archive.read()) == ['Containerfile']


def test_every_in_memory_kind_yields_the_same_bytes():
    
    payload = APP_CODE.encode('utf-8')
    entries = [
        StringEntry('/a/string.js', APP_CODE),
        BufferEntry('/a/buffer.js', payload),
        BufferEntry('/a/bytearray.js', bytearray(payload)),
        StreamEntry('/a/stream.js', io.BytesIO(payload)),
        StreamEntry('/a/text_stream.js', io.StringIO(APP_CODE))
    ]
    
    with build_archive('FROM scratch', entries) as archive:
        files = untar(archive.read())
    
    for name in ['a/string.js', 'a/buffer.js', 'a/bytearray.js', 'a/stream.js', 'a/text_stream.js']:
        assert files[name] == payload


def test_stream_is_read_in_chunks():
    
    payload = b'x' * 100
    stream = ChunkyStream(payload)
    
    with build_archive('FROM scratch', [StreamEntry('/app/index.js', stream)]) as archive:
        files = untar(archive.read())
    
    assert files['app/index.js'] == payload
    assert len(stream.reads) > 1
    assert all(size == ArchiveConst.CHUNK_SIZE for size in stream.reads)


def test_file_entry_keeps_content_and_mode(tmp_path):
    
    path = tmp_path / 'index.js'
    path.write_text(APP_CODE)
    os.chmod(str(path), 0o600)
    
    with build_archive('FROM scratch', [FileEntry('/app/index.js', str(path))]) as archive:
        payload = archive.read()
    
    with tarfile.open(fileobj=io.BytesIO(payload)) as tar:
        member = tar.getmember('app/index.js')
        assert member.mode & 0o777 == 0o600
        assert member.mtime == int(os.path.getmtime(str(path)))
        assert member.uid == 0 and member.uname == ''
    
    assert untar(payload)['app/index.js'] == APP_CODE.encode('utf-8')


def test_in_memory_headers():
    
    with build_archive('FROM scratch', [StringEntry('/app/index.js', APP_CODE)], mtime=1500000000) as archive:
        with tarfile.open(fileobj=archive) as tar:
            member = tar.getmember('app/index.js')
    
    assert member.size == len(APP_CODE.encode('utf-8'))
    assert member.mode == ArchiveConst.FILE_MODE
    assert member.mtime == 1500000000


def test_directory_tree_is_rooted_at_entry_name(app_dir):
    
    with build_archive('FROM scratch', [DirectoryEntry('app', str(app_dir))]) as archive:
        payload = archive.read()
    
    files = untar(payload)
    assert files['app/index.js'] == APP_CODE.encode('utf-8')
    assert files['app/package.json'] == APP_MANIFEST.encode('utf-8')
    assert files['app/lib/util.js'] == b'module.exports = {};\n'
    assert member_names(payload) == [
        'app', 'app/index.js', 'app/lib', 'app/lib/util.js', 'app/package.json', 'Dockerfile'
    ]


def test_same_inputs_same_member_order(app_dir):
    
    def names():
        entries = [DirectoryEntry('app', str(app_dir)), StringEntry('/extra.txt', 'x')]
        with build_archive('FROM scratch', entries) as archive:
            return member_names(archive.read())
    
    assert names() == names()


def test_missing_file_fails(tmp_path):
    
    with pytest.raises(ArchiveError) as e:
        build_archive('FROM scratch', [FileEntry('/app/index.js', str(tmp_path / 'nope.js'))])
    
    assert isinstance(e.value.__cause__, FileNotFoundError)


def test_missing_directory_fails(tmp_path):
    
    with pytest.raises(ArchiveError):
        build_archive('FROM scratch', [DirectoryEntry('app', str(tmp_path / 'nope'))])


def test_file_given_as_directory_fails(tmp_path):
    
    path = tmp_path / 'index.js'
    path.write_text(APP_CODE)
    
    with pytest.raises(ArchiveError):
        build_archive('FROM scratch', [DirectoryEntry('app', str(path))])


def test_broken_stream_fails():
    
    with pytest.raises(ArchiveError) as e:
        build_archive('FROM scratch', [StreamEntry('/app/index.js', BrokenStream())])
    
    assert isinstance(e.value.__cause__, OSError)


def test_closed_stream_fails():
    
    stream = io.BytesIO(APP_CODE.encode('utf-8'))
    stream.close()
    
    with pytest.raises(ArchiveError) as e:
        build_archive('FROM scratch', [StreamEntry('/app/index.js', stream)])
    
    assert isinstance(e.value.__cause__, ValueError)


def test_wrong_data_types_fail():
    
    with pytest.raises(ArchiveError):
        build_archive('FROM scratch', [StringEntry('/app/index.js', b'bytes')])
    
    with pytest.raises(ArchiveError):
        build_archive('FROM scratch', [BufferEntry('/app/index.js', 42)])
    
    with pytest.raises(ArchiveError):
        build_archive('FROM scratch', [StreamEntry('/app/index.js', 'not a stream')])


def test_non_entries_are_rejected():
    
    with pytest.raises(ArchiveError):
        Barrel().pack('FROM scratch', [('/app/index.js', 'code')])


def test_make_entry():
    
    assert isinstance(make_entry('/a', 'x', ArchiveConst.Kind.STRING), StringEntry)
    assert isinstance(make_entry('/a', b'x', ArchiveConst.Kind.BUFFER), BufferEntry)
    assert isinstance(make_entry('/a', io.BytesIO(), ArchiveConst.Kind.STREAM), StreamEntry)
    assert isinstance(make_entry('/a', '/tmp/a', ArchiveConst.Kind.FILE), FileEntry)
    assert isinstance(make_entry('a', '/tmp', ArchiveConst.Kind.DIRECTORY), DirectoryEntry)
    
    with pytest.raises(ArchiveError):
        make_entry('/a', 'x', 'symlink')


def test_entry_needs_a_name():
    
    with pytest.raises(ArchiveError):
        StringEntry('/', 'x')
