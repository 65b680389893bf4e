# -*- coding: utf-8 -*-

import pytest

from berth.bay.compass import DockerCompass, LoggerCompass
from berth.common.conf import ConfSource, DockerConf, LazyConf
from berth.common.constants import ArchiveConst, Package
from berth.common.errors import ConfigurationError, PrettyError


@pytest.fixture
def conf_files(tmp_path):
    
    default = tmp_path / 'default.yaml'
    user = tmp_path / 'user.yaml'
    local = tmp_path / 'local.yaml'
    default.write_text('docker:\n  uri: null\n  grace_period: 1\n  recipe_name: Dockerfile\n')
    user.write_text('docker:\n  uri: unix:///var/run/docker.sock\n')
    return default, user, local


def test_packaged_defaults():
    
    assert ConfSource.PKG == Package.CONF
    assert DockerConf.get('uri') is None
    assert DockerConf.get('grace_period') == 1


def test_user_conf_overrides_defaults(conf_files):
    
    default, user, local = conf_files
    conf = LazyConf(namespace='docker', sources=[str(default), str(user), str(local)])
    
    assert conf['uri'] == 'unix:///var/run/docker.sock'
    assert conf['grace_period'] == 1


def test_local_conf_wins_over_user_conf(conf_files):
    
    default, user, local = conf_files
    local.write_text('docker:\n  uri: http://localhost:2375\n')
    conf = LazyConf(namespace='docker', sources=[str(default), str(user), str(local)])
    
    assert conf['uri'] == 'http://localhost:2375'
    assert conf['recipe_name'] == 'Dockerfile'


def test_missing_default_conf(tmp_path):
    
    conf = LazyConf(namespace='docker', sources=[str(tmp_path / 'a'), str(tmp_path / 'b'), str(tmp_path / 'c')])
    
    with pytest.raises(ConfigurationError):
        conf.get('uri')


def test_docker_compass():
    
    compass = DockerCompass(custom_conf=dict(uri='http://docker.test', grace_period=0.5, transport={'timeout': 3}))
    
    assert compass.uri == 'http://docker.test'
    assert compass.grace_period == 0.5
    assert compass.transport == {'timeout': 3}
    assert compass.recipe_name == ArchiveConst.RECIPE_NAME


@pytest.mark.parametrize('custom_conf', [dict(grace_period=-1), dict(grace_period='soon'), dict(transport=[1])])
def test_docker_compass_rejects_bad_values(custom_conf):
    
    compass = DockerCompass(custom_conf=custom_conf)
    
    with pytest.raises(ConfigurationError):
        _ = compass.grace_period, compass.transport


def test_logger_compass(tmp_path):
    
    compass = LoggerCompass(custom_conf=dict(directory=str(tmp_path), name='tests'))
    
    assert compass.path_to_log_file == str(tmp_path / 'tests.log')
    assert compass.file_handler_kwargs['maxBytes'] == compass.max_bytes


def test_pretty_errors():
    
    try:
        try:
            raise OSError("disk full")
        except OSError as e:
            raise ConfigurationError("Could not read conf") from e
    except PrettyError as e:
        pretty = e.pretty()
    
    assert pretty == {
        'Error': 'ConfigurationError',
        'Message': 'Could not read conf',
        'cause': 'OSError: disk full'
    }
