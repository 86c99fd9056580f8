"""Shared test fixtures for graph visualizer tests."""

import pytest

from config import Config, EditorConfig, PlaybackConfig, ServerConfig
from graph import Edge, Graph, Node, generators
from engine import EditorSession, TickScheduler
from main import create_app


class FakeClock:
    """Monotonic clock the test moves by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def scheduler(clock):
    return TickScheduler(clock)


@pytest.fixture()
def config():
    return Config(
        editor=EditorConfig(),
        playback=PlaybackConfig(),
        server=ServerConfig(secret_key="test-secret"),
    )


@pytest.fixture()
def editor(config, scheduler):
    session = EditorSession(config, scheduler)
    yield session
    session.close()


@pytest.fixture()
def app(config, clock):
    app = create_app(config, clock=clock)
    app.config["TESTING"] = True
    yield app
    app.extensions["editor_sessions"].close()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def default_graph():
    return generators.default_graph()


@pytest.fixture()
def weighted_graph():
    """
        a --1-- b --2-- c
        |               |
        4               1
        |               |
        d ------7------ e        f (isolated)
    """
    nodes = [Node(n) for n in "abcdef"]
    edges = [
        Edge("ab", "a", "b", 1),
        Edge("bc", "b", "c", 2),
        Edge("ad", "a", "d", 4),
        Edge("ce", "c", "e", 1),
        Edge("de", "d", "e", 7),
    ]
    return Graph(nodes, edges)
