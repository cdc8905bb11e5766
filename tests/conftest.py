import pytest
import vectfit


def pytest_addoption(parser):
    parser.addoption('--num-workers', type=int, default=1)


@pytest.fixture(scope='session', autouse=True)
def num_workers(request):
    """Run every test with the requested number of channel worker threads."""
    n = request.config.getoption('num_workers', default=1)
    with vectfit.config.patch('num_workers', n):
        yield
