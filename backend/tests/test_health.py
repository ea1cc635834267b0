"""
Basic health and import tests for the accessibility compliance backend.
"""
import pytest
import sys
import os

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


def test_python_version():
    """Ensure Python 3.11+"""
    assert sys.version_info >= (3, 11)


def test_checker_modules_importable():
    """Test all checker modules can be imported"""
    import a11y_api.checker.analyzer
    import a11y_api.checker.contrast
    import a11y_api.checker.rules
    import a11y_api.checker.scanners
    assert True


def test_analyzer_has_required_methods():
    """Test AccessibilityAnalyzer exposes the full analysis and every per-rule check"""
    from a11y_api.checker.analyzer import AccessibilityAnalyzer
    analyzer = AccessibilityAnalyzer()
    required_methods = [
        'analyze',
        'check_missing_alt',
        'check_skipped_headings',
        'check_low_color_contrast',
        'check_missing_tabindex',
        'check_missing_labels',
        'check_missing_skip_link',
        'check_font_size_too_small',
        'check_broken_links',
    ]
    for method in required_methods:
        assert hasattr(analyzer, method), f"AccessibilityAnalyzer missing method: {method}"


def test_rule_registry_order_and_weights():
    from a11y_api.checker.rules import RULES
    assert [(r.key, r.weight) for r in RULES] == [
        ("missing_alt", 5),
        ("skipped_headings", 10),
        ("low_color_contrast", 5),
        ("missing_tabindex", 5),
        ("missing_labels", 5),
        ("missing_skip_link", 5),
        ("font_size_too_small", 5),
        ("broken_links", 5),
    ]


def test_health_endpoint():
    pytest.importorskip("httpx", reason="httpx not installed")
    from fastapi.testclient import TestClient
    from a11y_api.main import app
    client = TestClient(app)
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_root_endpoint():
    pytest.importorskip("httpx", reason="httpx not installed")
    from fastapi.testclient import TestClient
    from a11y_api.main import app, VERSION
    client = TestClient(app)
    body = client.get("/").json()
    assert body["version"] == VERSION
    assert body["docs"] == "/docs"
