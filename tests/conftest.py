"""Shared fakes for host collaborators."""

import pytest

from vaultmod.core.scheduler import ManualScheduler


class RecordingNotifier:
    def __init__(self):
        self.messages = []

    def notify(self, message):
        self.messages.append(message)


class ScriptedConfirmer:
    def __init__(self, answer=True):
        self.answer = answer
        self.asked = []

    def confirm(self, file_name):
        self.asked.append(file_name)
        return self.answer


class FakeWorkspace:
    def __init__(self, notes=None):
        self.notes = dict(notes or {})
        self.active = None
        self.commands = []
        self.fail_commands = False

    def active_note(self):
        return self.active

    def read_note(self, path):
        return self.notes.get(path)

    def execute_command(self, command_id):
        if self.fail_commands:
            raise RuntimeError(f"no such command: {command_id}")
        self.commands.append(command_id)
        return True


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def confirmer():
    return ScriptedConfirmer()


@pytest.fixture
def workspace():
    return FakeWorkspace()
