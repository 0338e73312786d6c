# -*- coding: utf-8 -*-

import os

from chatkit.common import path as chatkit_path


class FakeAppDirs(object):
    def __init__(self, root):
        self.user_log_dir = os.path.join(root, 'logs')


class TestPath(object):

    def test_missing_folder_is_created(self, tmpdir, monkeypatch):
        monkeypatch.setattr(chatkit_path, '_appdirs', FakeAppDirs(str(tmpdir)))

        assert chatkit_path.get_log_dir() == str(tmpdir.join('logs'))
        assert os.path.isdir(str(tmpdir.join('logs')))

    def test_existing_folder(self, tmpdir, monkeypatch):
        tmpdir.mkdir('logs')
        monkeypatch.setattr(chatkit_path, '_appdirs', FakeAppDirs(str(tmpdir)))
        assert chatkit_path.get_log_dir() == str(tmpdir.join('logs'))

    def test_folder_creation_failure(self, tmpdir, monkeypatch, caplog):
        tmpdir.join('logs').write('not a folder')
        monkeypatch.setattr(chatkit_path, '_appdirs', FakeAppDirs(str(tmpdir)))

        assert chatkit_path.get_log_dir() == str(tmpdir.join('logs'))
        assert 'Unable to create the missing folder' in caplog.text
