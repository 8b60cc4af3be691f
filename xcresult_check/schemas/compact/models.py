"""Pydantic models for ``xcresulttool get ... --compact`` output."""

from collections.abc import Sequence
from typing import Annotated

from pydantic import BeforeValidator, Field

from xcresult_check.models.base import Count, Model, none_as_empty


class Issue(Model):
    """A build warning or error."""

    issue_type: str | None = Field(default=None, alias="issueType")
    message: str | None = None
    source_url: str | None = Field(default=None, alias="sourceURL")


class Device(Model):
    """Device or simulator a build or test ran on."""

    device_name: str | None = Field(default=None, alias="deviceName")
    platform: str | None = None
    os_version: str | None = Field(default=None, alias="osVersion")

    @property
    def sdk(self) -> str | None:
        """Platform and OS version, e.g. ``"iOS Simulator 17.2"``."""
        parts = [part for part in (self.platform, self.os_version) if part]
        return " ".join(parts) or None


class BuildResults(Model):
    """Output of ``get build-results``."""

    action_title: str | None = Field(default=None, alias="actionTitle")
    status: str | None = None
    warning_count: Count = Field(default=0, alias="warningCount")
    error_count: Count = Field(default=0, alias="errorCount")
    warnings: Annotated[Sequence[Issue], BeforeValidator(none_as_empty)] = Field(
        default_factory=list
    )
    errors: Annotated[Sequence[Issue], BeforeValidator(none_as_empty)] = Field(
        default_factory=list
    )
    destination: Device | None = None
    start_time: float | None = Field(default=None, alias="startTime")
    end_time: float | None = Field(default=None, alias="endTime")


class TestFailureSummary(Model):
    """Failure entry of ``get test-results summary``."""

    __test__ = False

    test_name: str | None = Field(default=None, alias="testName")
    target_name: str | None = Field(default=None, alias="targetName")
    failure_text: str | None = Field(default=None, alias="failureText")
    test_identifier_string: str | None = Field(
        default=None, alias="testIdentifierString"
    )


class DeviceAndConfiguration(Model):
    """A device the test plan ran on."""

    device: Device | None = None


class TestSummary(Model):
    """Output of ``get test-results summary``."""

    __test__ = False

    title: str | None = None
    result: str | None = None
    total_test_count: Count = Field(default=0, alias="totalTestCount")
    failed_tests: Count = Field(default=0, alias="failedTests")
    test_failures: Annotated[
        Sequence[TestFailureSummary], BeforeValidator(none_as_empty)
    ] = Field(default_factory=list, alias="testFailures")
    devices_and_configurations: Annotated[
        Sequence[DeviceAndConfiguration], BeforeValidator(none_as_empty)
    ] = Field(default_factory=list, alias="devicesAndConfigurations")
    start_time: float | None = Field(default=None, alias="startTime")
    finish_time: float | None = Field(default=None, alias="finishTime")


class TestNode(Model):
    """Node of the ``get test-results tests`` tree."""

    __test__ = False

    node_type: str = Field(default="", alias="nodeType")
    name: str = ""
    result: str | None = None
    children: Annotated[Sequence["TestNode"], BeforeValidator(none_as_empty)] = Field(
        default_factory=list
    )


class TestDetails(Model):
    """Output of ``get test-results tests``."""

    __test__ = False

    test_nodes: Annotated[Sequence[TestNode], BeforeValidator(none_as_empty)] = Field(
        default_factory=list, alias="testNodes"
    )
