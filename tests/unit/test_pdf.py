"""
Unit tests for the reportlab pagination capability
"""

import pytest

from proformat.core.types import PaginationOptions
from proformat.export import ExportRenderer, HostCapabilities, ReportLabPaginator
from proformat.exceptions import ExportIOFailure, PaginationNotReadyError


@pytest.mark.unit
class TestReportLabPaginator:
    """Test PDF output written through reportlab"""

    @pytest.mark.asyncio
    async def test_writes_pdf(self, tmp_path, sample_markdown):
        """Should write a PDF file for rendered content"""
        renderer = ExportRenderer(HostCapabilities(pagination=ReportLabPaginator(tmp_path)))

        filename = await renderer.paginate(sample_markdown)

        data = (tmp_path / filename).read_bytes()
        assert data.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_nested_lists_and_code(self, tmp_path):
        """Should handle nested lists, code blocks and rules"""
        text = "- outer\n    - inner `code`\n\n---\n\n```\nprint('x')\n```\n"
        renderer = ExportRenderer(HostCapabilities(pagination=ReportLabPaginator(tmp_path)))

        filename = await renderer.paginate(
            text, PaginationOptions(orientation="landscape", page_format="a4")
        )

        assert (tmp_path / filename).stat().st_size > 0

    def test_not_ready_until_warmed(self, tmp_path):
        """Should report readiness only after the backend is loaded"""
        paginator = ReportLabPaginator(tmp_path, warm=False)
        assert not paginator.is_ready()

        paginator.warm_up()
        assert paginator.is_ready()

    @pytest.mark.asyncio
    async def test_renderer_refuses_cold_backend(self, tmp_path):
        """Should surface the initializing message and write nothing"""
        renderer = ExportRenderer(
            HostCapabilities(pagination=ReportLabPaginator(tmp_path, warm=False))
        )

        with pytest.raises(PaginationNotReadyError):
            await renderer.paginate("# Title")

        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_save_refuses_when_cold(self, tmp_path):
        """Should refuse direct saves before warm-up"""
        paginator = ReportLabPaginator(tmp_path, warm=False)

        with pytest.raises(PaginationNotReadyError):
            await paginator.save("<p>x</p>", "out.pdf", PaginationOptions())

    @pytest.mark.asyncio
    async def test_unknown_page_format(self, tmp_path):
        """Should reject page formats reportlab does not know"""
        paginator = ReportLabPaginator(tmp_path)

        with pytest.raises(ExportIOFailure, match="page format"):
            await paginator.save("<p>x</p>", "out.pdf", PaginationOptions(page_format="scroll"))


@pytest.mark.unit
class TestFlowables:
    """Test the mapping from rendered content to platypus flowables"""

    @staticmethod
    def texts(flowables):
        return [f.getPlainText() for f in flowables if hasattr(f, "getPlainText")]

    def test_definition_lists_keep_their_text(self, tmp_path):
        """Should emit both the term and its definition"""
        content = ExportRenderer().render_content("Budget\n:   The Q3 spending plan\n")

        texts = self.texts(ReportLabPaginator(tmp_path).build_flowables(content))

        assert "Budget" in texts
        assert any("Q3 spending plan" in t for t in texts)

    def test_unknown_containers_keep_nested_blocks(self, tmp_path):
        """Should descend into containers holding block elements"""
        content = "<section><p>first</p><p>second</p></section>"

        texts = self.texts(ReportLabPaginator(tmp_path).build_flowables(content))

        assert texts == ["first", "second"]

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Q3&nbsp;budget", "Q3\xa0budget"),
            ("Copyright &copy; 2025", "Copyright \xa9 2025"),
            ("Budget &mdash; approved.", "Budget \u2014 approved."),
            ("R&D; roadmap", "R&D; roadmap"),
        ],
    )
    def test_named_entities(self, tmp_path, text, expected):
        """Should resolve HTML entities and keep unknown ones as literal text"""
        content = ExportRenderer().render_content(text)

        texts = self.texts(ReportLabPaginator(tmp_path).build_flowables(content))

        assert texts == [expected]

    @pytest.mark.asyncio
    async def test_entities_do_not_break_pagination(self, tmp_path):
        """Should write a PDF for text the HTML export already handles"""
        renderer = ExportRenderer(HostCapabilities(pagination=ReportLabPaginator(tmp_path)))

        filename = await renderer.paginate("# R&D; roadmap\n\nBudget &mdash; approved&nbsp;today.")

        assert (tmp_path / filename).read_bytes().startswith(b"%PDF")

    def test_cold_backend_refuses_to_build(self, tmp_path):
        """Should raise the not-ready error rather than fail on a missing backend"""
        with pytest.raises(PaginationNotReadyError):
            ReportLabPaginator(tmp_path, warm=False).build_flowables("<p>x</p>")
