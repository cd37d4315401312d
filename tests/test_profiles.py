"""Unit tests for aws_alternator.profiles module."""

import pytest

from aws_alternator.profiles import (
    Profile,
    ProfileKind,
    classify,
    find_profile,
    profile_name_from_section,
    section_name,
)


class TestClassify:
    """Tests for classify() function."""
    
    def test_region_only_is_standard(self):
        """A section with only a region is a standard profile."""
        assert classify({'region': 'us-east-1'}) == ProfileKind.STANDARD
    
    def test_empty_section_is_standard(self):
        assert classify({}) == ProfileKind.STANDARD
    
    def test_sso_start_url_makes_sso(self):
        """Adding sso_start_url reclassifies the section regardless of key order."""
        assert classify({'region': 'us-east-1', 'sso_start_url': 'https://x'}) == ProfileKind.SSO
        assert classify({'sso_start_url': 'https://x', 'region': 'us-east-1'}) == ProfileKind.SSO
    
    def test_sso_region_alone_is_not_sso(self):
        assert classify({'sso_region': 'us-east-1'}) == ProfileKind.STANDARD
    
    def test_okta_org_domain_makes_federated(self):
        assert classify({'okta_org_domain': 'example.okta.com'}) == ProfileKind.FEDERATED
    
    def test_federated_wins_over_sso(self):
        """The federated designator is checked first."""
        items = {'sso_start_url': 'https://x', 'okta_org_domain': 'example.okta.com'}
        
        assert classify(items) == ProfileKind.FEDERATED


class TestSectionNames:
    """Tests for section_name() and profile_name_from_section()."""
    
    def test_default_section(self):
        assert section_name('default') == 'default'
        assert profile_name_from_section('default') == 'default'
    
    def test_named_section(self):
        assert section_name('dev') == 'profile dev'
        assert profile_name_from_section('profile dev') == 'dev'
    
    @pytest.mark.parametrize('section', ['sso-session corp', 'dev', 'services shared'])
    def test_other_sections_are_ignored(self, section):
        assert profile_name_from_section(section) is None


class TestProfile:
    """Tests for the Profile dataclass."""
    
    def test_from_section_sso(self):
        profile = Profile.from_section('sso-dev', [
            ('sso_start_url', 'https://example.awsapps.com/start'),
            ('sso_region', 'us-east-1'),
            ('sso_account_id', '123456789012'),
            ('sso_role_name', 'Developer'),
            ('output', 'json'),
        ])
        
        assert profile.name == 'sso-dev'
        assert profile.kind == ProfileKind.SSO
        assert profile.sso_account_id == '123456789012'
        assert profile.region is None
    
    def test_config_items_skips_absent_fields(self):
        profile = Profile(name='dev', region='us-east-1')
        
        assert profile.config_items() == [('region', 'us-east-1')]
    
    def test_config_items_order(self):
        """SSO fields come first, then Okta fields, then region."""
        profile = Profile(
            name='mixed',
            kind=ProfileKind.FEDERATED,
            region='eu-west-1',
            okta_org_domain='example.okta.com',
            okta_oidc_client_id='client',
            okta_aws_iam_role='arn:aws:iam::123456789012:role/Admin',
        )
        
        keys = [key for key, _ in profile.config_items()]
        
        assert keys == ['okta_org_domain', 'okta_oidc_client_id', 'okta_aws_iam_role', 'region']
    
    def test_section_name_property(self):
        assert Profile(name='default').section_name == 'default'
        assert Profile(name='dev').section_name == 'profile dev'
    
    def test_find_profile(self):
        profiles = [Profile(name='dev'), Profile(name='dev-2')]
        
        assert find_profile(profiles, 'dev-2') is profiles[1]
        assert find_profile(profiles, 'de') is None
