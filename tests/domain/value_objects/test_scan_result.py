"""Tests for device scan results."""

from modbus_term.domain.value_objects import DeviceScanResult, ScanStatus, ScanSummary


class TestDeviceScanResult:
    """Test DeviceScanResult."""

    def test_responded(self):
        """Test exception replies count as responding."""
        assert DeviceScanResult(1, ScanStatus.SUCCESS, 2.0).responded
        assert DeviceScanResult(2, ScanStatus.EXCEPTION, 2.0, 2, "Illegal Data Address").responded
        assert not DeviceScanResult(3, ScanStatus.TIMEOUT).responded

    def test_str(self):
        """Test human-readable outcome."""
        assert str(DeviceScanResult(42, ScanStatus.SUCCESS, 12.34)) == (
            "Device ID 42 responded successfully in 12.3 ms"
        )
        assert str(DeviceScanResult(99, ScanStatus.EXCEPTION, 1.0, 2, "Illegal Data Address")) == (
            "Device ID 99 responded with exception: Illegal Data Address"
        )
        assert str(DeviceScanResult(7, ScanStatus.TIMEOUT)) == "Device ID 7 timed out"


class TestScanSummary:
    """Test ScanSummary."""

    def test_from_results(self):
        """Test results are counted by status."""
        results = [
            DeviceScanResult(1, ScanStatus.SUCCESS, 1.0),
            DeviceScanResult(2, ScanStatus.TIMEOUT),
            DeviceScanResult(3, ScanStatus.TIMEOUT),
            DeviceScanResult(4, ScanStatus.EXCEPTION, 1.0, 1),
        ]
        summary = ScanSummary.from_results(results)
        assert (summary.success, summary.exception, summary.timeout) == (1, 1, 2)
        assert summary.total == 4
        assert not summary.cancelled

    def test_str(self):
        """Test summary wording for complete and cancelled scans."""
        assert str(ScanSummary(1, 1, 245)) == (
            "Scan complete: 1 device(s) responded successfully, 1 with exceptions, 245 timed out"
        )
        assert str(ScanSummary(cancelled=True)).startswith("Scan cancelled")
