"""
Departures Routing Backend - Package Setup

departure 시간표 기반 최단 도착 시각 경로 탐색 서비스
"""

from setuptools import setup, find_namespace_packages


setup(
    name='departures-routing',
    version='1.0.0',
    author='KindMap Team',
    author_email='team@kindmap.com',
    description='Earliest-arrival route search over timed, priced departures',
    long_description='''
    Async best-first route search over a departures timetable.
    Returns the path that reaches the destination earliest and
    reports its accumulated ticket cost. Served over FastAPI with
    PostgreSQL storage and an optional Redis route cache.
    ''',
    packages=find_namespace_packages(include=['app', 'app.*']),
    install_requires=[
        'fastapi>=0.100.0',
        'uvicorn[standard]>=0.22.0',
        'pydantic>=2.0',
        'psycopg2-binary>=2.9',
        'redis>=4.5',
        'python-dotenv>=1.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'pytest-mock>=3.10',
            'pytest-asyncio>=0.21',
            'httpx>=0.24',
        ],
    },
    zip_safe=False,
    python_requires='>=3.10',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Framework :: FastAPI',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
)
