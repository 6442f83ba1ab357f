"""Unit tests for summary module using mock boto3 client."""
import os
import sys

_repo_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
if _repo_root not in sys.path:
    sys.path.insert(0, _repo_root)

from api_cloudfront.mock_boto3 import MockCloudFormationClient
from api_cloudfront import summary


class TestSummary:
    """Tests for reading the deployed distribution domain."""

    def test_distribution_domain_from_outputs(self):
        client = MockCloudFormationClient()
        client.add_stack("orders-dev", {"ServiceEndpoint": "https://x", "ApiDistribution": "d111.cloudfront.net"})
        outputs = summary.describe_stack_outputs(client, "orders-dev")
        assert summary.find_distribution_domain(outputs) == "d111.cloudfront.net"

    def test_build_summary_single_domain(self):
        outputs = [{"OutputKey": "ApiDistribution", "OutputValue": "d111.cloudfront.net"}]
        assert summary.build_summary(outputs, "api.example.com") == {
            "distribution_domain": "d111.cloudfront.net",
            "aliases": ["api.example.com"],
        }

    def test_build_summary_alias_list(self):
        outputs = [{"OutputKey": "ApiDistribution", "OutputValue": "d111.cloudfront.net"}]
        result = summary.build_summary(outputs, ["api.example.com", "www.example.com"])
        assert result["aliases"] == ["api.example.com", "www.example.com"]

    def test_missing_output(self):
        assert summary.build_summary([{"OutputKey": "ServiceEndpoint", "OutputValue": "x"}], "api.example.com") is None

    def test_empty_output_value(self):
        assert summary.build_summary([{"OutputKey": "ApiDistribution", "OutputValue": ""}], "api.example.com") is None
