"""Fixtures for the reconciliation console."""

import pytest

from estate_recon.console.view_model import ReconciliationViewModel

from fakes import FakeGateway, RecordingNotifier


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def view_model(gateway, notifier):
    return ReconciliationViewModel(gateway, notifier)
