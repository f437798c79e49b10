import pytest

from patchgraph.test import graphs


@pytest.fixture
def add_project():
    return graphs.add_project()


@pytest.fixture
def fan_out_project():
    return graphs.fan_out_project()
