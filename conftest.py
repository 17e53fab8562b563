import pytest


@pytest.fixture(scope='session', autouse=True)
def _allow_module_setup_db_access(django_db_setup, django_db_blocker):
    """Let unittest-style setUpModule() hooks seed the test database, as Django's runner does."""
    with django_db_blocker.unblock():
        yield
