"""Unit tests for route53 module using mock boto3 client."""
import os
import sys
from unittest.mock import patch
import pytest
from botocore.exceptions import ClientError

_repo_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
if _repo_root not in sys.path:
    sys.path.insert(0, _repo_root)

from api_cloudfront.mock_boto3 import MockRoute53Client
from api_cloudfront import route53
from api_cloudfront.errors import DnsUpsertError


class TestFindHostedZoneId:
    """Tests for find_hosted_zone_id."""

    def test_exact_zone(self):
        client = MockRoute53Client()
        client.add_hosted_zone("/hostedzone/Z123", "example.com")
        assert route53.find_hosted_zone_id(client, "example.com") == "/hostedzone/Z123"

    def test_trailing_dot(self):
        client = MockRoute53Client()
        client.add_hosted_zone("/hostedzone/Z123", "example.com")
        assert route53.find_hosted_zone_id(client, "example.com.") == "/hostedzone/Z123"

    def test_parent_zone_is_not_used(self):
        client = MockRoute53Client()
        client.add_hosted_zone("/hostedzone/Z123", "example.com")
        assert route53.find_hosted_zone_id(client, "sub.example.com") is None


class TestUpsertAliasRecords:
    """Tests for upsert_alias_records."""

    def test_one_record_per_domain(self):
        client = MockRoute53Client()
        client.add_hosted_zone("/hostedzone/Z123", "example.com")
        zone_id = route53.upsert_alias_records(
            client, ["api.example.com", "www.example.com"], "example.com", "d111.cloudfront.net"
        )
        assert zone_id == "/hostedzone/Z123"
        records = client.state["record_sets"]["/hostedzone/Z123"]
        assert [r["Name"] for r in records] == ["api.example.com.", "www.example.com."]
        for record in records:
            assert record["Type"] == "A"
            assert record["AliasTarget"] == {
                "DNSName": "d111.cloudfront.net",
                "EvaluateTargetHealth": False,
                "HostedZoneId": route53.CLOUDFRONT_HOSTED_ZONE_ID,
            }

    def test_upsert_replaces_existing_record(self):
        client = MockRoute53Client()
        client.add_hosted_zone("/hostedzone/Z123", "example.com")
        route53.upsert_alias_records(client, ["api.example.com"], "example.com", "old.cloudfront.net")
        route53.upsert_alias_records(client, ["api.example.com"], "example.com", "new.cloudfront.net")
        records = client.state["record_sets"]["/hostedzone/Z123"]
        assert len(records) == 1
        assert records[0]["AliasTarget"]["DNSName"] == "new.cloudfront.net"

    def test_no_hosted_zone_changes_nothing(self):
        client = MockRoute53Client()
        assert route53.upsert_alias_records(client, ["api.example.com"], "example.com", "d1.cloudfront.net") is None
        assert client.state["record_sets"] == {}

    def test_failure_raises_without_retry(self):
        client = MockRoute53Client()
        client.add_hosted_zone("/hostedzone/Z123", "example.com")
        error = ClientError({"Error": {"Code": "InvalidChangeBatch", "Message": "bad"}}, "ChangeResourceRecordSets")
        with patch.object(client, "change_resource_record_sets", side_effect=error) as change:
            with pytest.raises(DnsUpsertError):
                route53.upsert_alias_records(
                    client, ["api.example.com", "www.example.com"], "example.com", "d1.cloudfront.net"
                )
        assert change.call_count == 1

    def test_upsert_request_shape(self):
        client = MockRoute53Client()
        client.add_hosted_zone("/hostedzone/Z123", "example.com")
        with patch.object(client, "change_resource_record_sets", return_value={}) as change:
            route53.upsert_resource_record_set(client, "/hostedzone/Z123", "api.example.com", "d1.cloudfront.net", "ZTARGET")
        kwargs = change.call_args.kwargs
        assert kwargs["HostedZoneId"] == "/hostedzone/Z123"
        (only_change,) = kwargs["ChangeBatch"]["Changes"]
        assert only_change["Action"] == "UPSERT"
        assert only_change["ResourceRecordSet"]["AliasTarget"]["HostedZoneId"] == "ZTARGET"
