"""Tests for ThresholdAnnotator.

Covers the when_failed indicator, metadata rule precedence, the default to
passed, and the protocol gate.
"""

from datetime import datetime

import pytest

from drive_health.analysis.annotator import (
    FAILED_IN_PAST_REASON,
    FAILING_NOW_REASON,
    ThresholdAnnotator,
)
from drive_health.analysis.thresholds import AtaAttributeMetadata, ObservedThreshold
from drive_health.models import (
    AttributeStatus,
    Device,
    Smart,
    SmartAtaAttribute,
    SmartNvmeAttribute,
    SmartScsiAttribute,
)


def _device(protocol: str = "ATA", *attributes: SmartAtaAttribute) -> Device:
    return Device(
        wwn="0x50014ee2b5c6d7e8",
        device_protocol=protocol,
        smart_results=[Smart(date=datetime(2026, 3, 1), ata_attributes=list(attributes))],
    )


class RecordingRule:
    """Fake metadata entry that records calls and applies a fixed verdict."""

    def __init__(self, status: AttributeStatus = None, reason: str = ""):
        self.status = status
        self.reason = reason
        self.calls = []

    def observed_threshold_status(self, attribute, rates=None):
        self.calls.append((attribute.attribute_id, attribute.status))
        if self.status is not None:
            attribute.status = self.status
            attribute.status_reason = self.reason


class TestWhenFailedIndicator:
    """Tests for the legacy when_failed classification."""

    @pytest.mark.parametrize("raw", ["FAILING_NOW", "failing_now", "Failing_Now"])
    def test_failing_now_marks_failed(self, raw: str):
        """FAILING_NOW (any case) marks the attribute failed."""
        attr = SmartAtaAttribute(attribute_id=1, when_failed=raw)
        device = _device("ATA", attr)

        ThresholdAnnotator(metadata={}).apply_metadata_rules(device)

        assert attr.status == AttributeStatus.FAILED
        assert attr.status_reason == FAILING_NOW_REASON

    @pytest.mark.parametrize("raw", ["IN_THE_PAST", "in_the_past"])
    def test_in_the_past_marks_warning(self, raw: str):
        """IN_THE_PAST (any case) marks the attribute as a warning."""
        attr = SmartAtaAttribute(attribute_id=1, when_failed=raw)
        device = _device("ATA", attr)

        ThresholdAnnotator(metadata={}).apply_metadata_rules(device)

        assert attr.status == AttributeStatus.WARNING
        assert attr.status_reason == FAILED_IN_PAST_REASON

    def test_indicator_assigned_after_construction_is_decoded(self):
        """Setting raw when_failed text on an existing attribute still fails it."""
        attr = SmartAtaAttribute(attribute_id=1)
        attr.when_failed = "failing_now"
        device = _device("ATA", attr)

        ThresholdAnnotator(metadata={}).apply_metadata_rules(device)

        assert attr.status == AttributeStatus.FAILED
        assert attr.status_reason == FAILING_NOW_REASON

    def test_unrecognized_value_defaults_to_passed(self):
        """Unknown when_failed text is left unclassified, then defaults to passed."""
        attr = SmartAtaAttribute(attribute_id=1, when_failed="SOMETIMES")
        device = _device("ATA", attr)

        ThresholdAnnotator(metadata={}).apply_metadata_rules(device)

        assert attr.status == AttributeStatus.PASSED
        assert attr.status_reason == ""


class TestMetadataRules:
    """Tests for metadata lookup and precedence."""

    def test_no_indicator_and_no_metadata_defaults_to_passed(self):
        """Attribute with nothing to say ends passed with no reason."""
        attr = SmartAtaAttribute(attribute_id=1, raw_value=0)
        device = _device("ATA", attr)

        ThresholdAnnotator(metadata={}).apply_metadata_rules(device)

        assert attr.status == AttributeStatus.PASSED
        assert attr.status_reason == ""

    def test_passed_default_clears_leftover_reason(self):
        """An attribute reloaded with an old reason ends passed with no reason."""
        attr = SmartAtaAttribute(attribute_id=1, status_reason="stale reason")
        device = _device("ATA", attr)

        ThresholdAnnotator(metadata={}).apply_metadata_rules(device)

        assert attr.status == AttributeStatus.PASSED
        assert attr.status_reason == ""

    def test_rule_runs_after_indicator(self):
        """The metadata rule sees the status set by when_failed."""
        rule = RecordingRule()
        attr = SmartAtaAttribute(attribute_id=5, when_failed="FAILING_NOW")
        device = _device("ATA", attr)

        ThresholdAnnotator(metadata={5: rule}).apply_metadata_rules(device)

        assert rule.calls == [(5, AttributeStatus.FAILED)]
        assert attr.status == AttributeStatus.FAILED

    def test_rule_verdict_overrides_failing_now(self):
        """A passing metadata verdict wins over FAILING_NOW."""
        rule = RecordingRule(status=AttributeStatus.PASSED)
        attr = SmartAtaAttribute(attribute_id=5, when_failed="FAILING_NOW")
        device = _device("ATA", attr)

        ThresholdAnnotator(metadata={5: rule}).apply_metadata_rules(device)

        assert attr.status == AttributeStatus.PASSED
        assert attr.status_reason == ""

    def test_default_table_passing_value_overrides_failing_now(self):
        """Reallocated sectors at 0 is passing even if smartctl said FAILING_NOW."""
        attr = SmartAtaAttribute(attribute_id=5, raw_value=0, when_failed="FAILING_NOW")
        device = _device("ATA", attr)

        ThresholdAnnotator().apply_metadata_rules(device)

        assert attr.status == AttributeStatus.PASSED
        assert attr.failure_rate == pytest.approx(0.025)

    def test_default_does_not_overwrite_rule_failure(self):
        """A failure recorded by the rule survives the passed default."""
        rule = RecordingRule(status=AttributeStatus.FAILED, reason="too many")
        attr = SmartAtaAttribute(attribute_id=197, raw_value=50)
        device = _device("ATA", attr)

        ThresholdAnnotator(metadata={197: rule}).apply_metadata_rules(device)

        assert attr.status == AttributeStatus.FAILED
        assert attr.status_reason == "too many"

    def test_rule_not_called_for_unknown_ids(self):
        """Only ids present in the table reach a rule."""
        rule = RecordingRule()
        attrs = [SmartAtaAttribute(attribute_id=i) for i in (1, 5, 9)]
        device = _device("ATA", *attrs)

        ThresholdAnnotator(metadata={5: rule}).apply_metadata_rules(device)

        assert [call[0] for call in rule.calls] == [5]
        assert all(a.status == AttributeStatus.PASSED for a in attrs)

    def test_failure_rates_are_passed_to_rule(self):
        """Custom failure rates reach the observed threshold rule."""
        from drive_health.analysis.thresholds import FailureRateThresholds

        metadata = {
            187: AtaAttributeMetadata(
                attribute_id=187,
                display_name="Reported Uncorrectable Errors",
                observed_thresholds=(ObservedThreshold(0, 10, 0.15),),
            )
        }
        attr = SmartAtaAttribute(attribute_id=187, raw_value=3)
        device = _device("ATA", attr)

        annotator = ThresholdAnnotator(
            metadata=metadata, rates=FailureRateThresholds(warning=0.05, failure=0.12)
        )
        annotator.apply_metadata_rules(device)

        assert attr.status == AttributeStatus.FAILED
        assert attr.status_reason == "Observed Failure Rate for Attribute is greater than 12%"


class TestProtocolGate:
    """Only ATA drives are annotated."""

    def test_nvme_device_is_untouched(self):
        """Annotating an NVMe drive leaves every status exactly as it was."""
        smart = Smart(
            date=datetime(2026, 3, 1),
            nvme_attributes=[
                SmartNvmeAttribute(
                    attribute_id="media_errors",
                    value=4,
                    history=[SmartNvmeAttribute(attribute_id="media_errors", value=2)],
                ),
                SmartNvmeAttribute(attribute_id="critical_warning", value=0),
            ],
        )
        device = Device(wwn="eui.0025388b91b2c3d4", device_protocol="NVMe", smart_results=[smart])
        before = device.model_dump()

        ThresholdAnnotator().apply_metadata_rules(device)

        assert device.model_dump() == before
        assert all(a.status == AttributeStatus.UNSET for a in smart.nvme_attributes)

    def test_scsi_device_with_ata_attributes_is_untouched(self):
        """The gate is the device protocol, not the attribute collection."""
        attr = SmartAtaAttribute(attribute_id=5, when_failed="FAILING_NOW")
        device = _device("SCSI", attr)
        device.smart_results[0].scsi_attributes = [
            SmartScsiAttribute(attribute_id="scsi_grown_defect_list", value=0)
        ]

        ThresholdAnnotator().apply_metadata_rules(device)

        assert attr.status == AttributeStatus.UNSET
        assert device.smart_results[0].scsi_attributes[0].status == AttributeStatus.UNSET

    def test_device_without_results_is_noop(self):
        """An ATA drive with no results is left alone."""
        device = Device(wwn="0x50014ee2b5c6d7e8", device_protocol="ATA")

        ThresholdAnnotator().apply_metadata_rules(device)

        assert device.smart_results == []

    def test_only_latest_result_is_annotated(self):
        """History entries are not annotated."""
        old = SmartAtaAttribute(attribute_id=5, raw_value=2)
        attr = SmartAtaAttribute(attribute_id=5, raw_value=0, history=[old])
        device = _device("ATA", attr)

        device.apply_metadata_rules()

        assert attr.status == AttributeStatus.PASSED
        assert old.status == AttributeStatus.UNSET
