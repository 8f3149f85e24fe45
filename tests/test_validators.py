"""Tests for registry validators."""

import pytest

from dep_verify.core.parsers.base import DependencyType
from dep_verify.registries.validators import (
    CratesValidator,
    GradleValidator,
    MavenValidator,
    NpmValidator,
    NuGetValidator,
    PyPiValidator,
    create_validators,
)


class FakeProbe:
    """Records probed URLs and answers with a fixed result."""

    def __init__(self, result=True):
        self.result = result
        self.urls = []

    async def check_url_exists(self, url):
        self.urls.append(url)
        return self.result


@pytest.fixture
def probe():
    return FakeProbe()


@pytest.mark.parametrize("validator_class,name,url", [
    (NpmValidator, "lodash", "https://registry.npmjs.org/lodash"),
    (NpmValidator, "@angular/core", "https://registry.npmjs.org/@angular%2Fcore"),
    (NuGetValidator, "Newtonsoft.Json", "https://api.nuget.org/v3-flatcontainer/newtonsoft.json/index.json"),
    (PyPiValidator, "Django", "https://pypi.org/pypi/django/json"),
    # Canonical name, not only lowercased: PyPI would redirect the dotted spelling
    (PyPiValidator, "zope.interface", "https://pypi.org/pypi/zope-interface/json"),
    (CratesValidator, "serde", "https://crates.io/api/v1/crates/serde"),
    (MavenValidator, "com.google.guava:guava",
     "https://repo1.maven.org/maven2/com/google/guava/guava/maven-metadata.xml"),
    (GradleValidator, "org.slf4j:slf4j-api",
     "https://repo1.maven.org/maven2/org/slf4j/slf4j-api/maven-metadata.xml"),
])
def test_build_url(probe, validator_class, name, url):
    assert validator_class(probe).build_url(name) == url


@pytest.mark.parametrize("name", ["guava", "a:b:c", ":guava", "com.google:", " : "])
def test_maven_rejects_malformed_coordinates(probe, name):
    assert MavenValidator(probe).build_url(name) is None


@pytest.mark.asyncio
@pytest.mark.parametrize("result", [True, False, None])
async def test_validate_returns_probe_answer(result):
    probe = FakeProbe(result)

    assert await NpmValidator(probe).validate("lodash") is result
    assert probe.urls == ["https://registry.npmjs.org/lodash"]


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   "])
async def test_blank_name_is_invalid_without_request(probe, name):
    assert await CratesValidator(probe).validate(name) is False
    assert probe.urls == []


@pytest.mark.asyncio
async def test_malformed_maven_name_is_invalid_without_request(probe):
    assert await MavenValidator(probe).validate("not-a-coordinate") is False
    assert probe.urls == []


@pytest.mark.asyncio
async def test_gradle_delegates_to_maven(probe):
    gradle = GradleValidator(probe)

    assert isinstance(gradle.maven_validator, MavenValidator)
    assert await gradle.validate("junit:junit") is True
    assert probe.urls == [MavenValidator(probe).build_url("junit:junit")]


def test_create_validators_covers_every_ecosystem(probe):
    validators = create_validators(probe)

    assert set(validators) == set(DependencyType)
    assert all(validator.probe is probe for validator in validators.values())
    assert all(ecosystem == validator.ecosystem for ecosystem, validator in validators.items())
