"""Unit tests for the format catalog and size estimate."""

from fusion_export.models.formats import (
    FORMAT_CATALOG,
    estimate_size,
    formats_by_category,
    get_format_option,
)
from fusion_export.models.options import DownloadFormat, DownloadOptions
from fusion_export.models.project import GeneratedApp, GeneratedFile


def _app(size: int) -> GeneratedApp:
    return GeneratedApp(name="sized", files=[GeneratedFile(path="a.ts", content="x" * size)])


class TestCatalog:
    """Tests for FORMAT_CATALOG."""

    def test_one_entry_per_format(self):
        assert [option.format for option in FORMAT_CATALOG] == list(DownloadFormat)

    def test_zip_is_recommended(self):
        option = get_format_option(DownloadFormat.ZIP)
        assert option.recommended is True
        assert option.badge == "Most Popular"
        assert [o.format for o in FORMAT_CATALOG if o.recommended] == [DownloadFormat.ZIP]

    def test_grouped_by_category(self):
        grouped = formats_by_category()
        assert sum(len(options) for options in grouped.values()) == len(FORMAT_CATALOG)
        assert DownloadFormat.ZIP in [o.format for o in grouped["archive"]]


class TestEstimateSize:
    """Tests for estimate_size."""

    def test_plain_medium_format(self):
        options = DownloadOptions(include_documentation=False)
        assert estimate_size(_app(1000), options) == 1500

    def test_multipliers_compound(self):
        options = DownloadOptions(
            include_documentation=True,
            include_tests=True,
            include_docker_files=True,
            include_cicd=True,
        )
        assert estimate_size(_app(1000), options) == round(1000 * 1.5 * 1.2 * 1.5 * 1.3 * 1.2)

    def test_empty_app(self):
        assert estimate_size(GeneratedApp(name="e"), DownloadOptions()) == 0
