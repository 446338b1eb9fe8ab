import django
from django.conf import settings


def pytest_configure():
    settings.configure(
        DEBUG=True,
        SECRET_KEY='djrobokassa-tests',
        ALLOWED_HOSTS=['testserver'],
        INSTALLED_APPS=['djrobokassa'],
        ROOT_URLCONF='djrobokassa.urls',
        DATABASES={},
        ROBOKASSA_SHOP_ID='demo',
        ROBOKASSA_PASSWORD1='p1',
        ROBOKASSA_PASSWORD2='p2',
        ROBOKASSA_HASHING_ALGORITHM='md5',
    )
    django.setup()
