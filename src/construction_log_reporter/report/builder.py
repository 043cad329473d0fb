"""Daily construction log report builder."""

import os
import tempfile
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.platypus import Flowable, Image, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..config import constants
from ..io.image_loader import fit_within, load_photo
from ..models.report import MediaItem, ProjectInfo, ReportConfig, ReportInput
from ..utils.logger import get_logger
from ..utils.exceptions import ImageProcessingError, ReportGenerationError

logger = get_logger(__name__)

LABEL_COLUMN_WIDTH = 100
CELL_PADDING = 4
BODY_ROW_CHARS = 400
CAPTION_MAX_CHARS = 60


def select_photos(media: list[MediaItem]) -> list[MediaItem]:
    """PHOTO items in capture order; videos are not rendered in the report."""
    return sorted((item for item in media if item.is_photo), key=lambda item: item.created_at)


def photo_caption(item: MediaItem) -> str:
    """Caption under a gallery photo: 'HH:MM - description', shortened to fit the cell."""
    description = " ".join(item.description.split())
    if len(description) > CAPTION_MAX_CHARS:
        description = description[: CAPTION_MAX_CHARS - 1] + "…"
    return f"{item.created_at.strftime(constants.CAPTION_TIME_FORMAT)} - {description}"


def split_rows(text: str, width: int = BODY_ROW_CHARS) -> list[str]:
    """
    Break text into pieces small enough for one table row.

    A table row cannot split across pages, so long text is cut at line
    breaks and then every width characters. Empty text yields one empty piece.
    """
    return [
        line[i:i + width]
        for line in (text.splitlines() or [""])
        for i in range(0, max(len(line), 1), width)
    ]


def register_font(font_name: str) -> None:
    """Register a built-in CID font once, mapping bold/italic onto the same face."""
    if font_name in pdfmetrics.getRegisteredFontNames():
        return
    try:
        pdfmetrics.registerFont(UnicodeCIDFont(font_name))
    except Exception as e:
        error_msg = f"Unsupported report font {font_name}: {e}"
        logger.error(error_msg)
        raise ReportGenerationError(error_msg) from e
    pdfmetrics.registerFontFamily(
        font_name, normal=font_name, bold=font_name, italic=font_name, boldItalic=font_name
    )


def _commit_file(tmp_path: Path, output_path: Path) -> None:
    os.replace(tmp_path, output_path)


class ReportBuilder:
    """Lays out one day's construction log as an A4 PDF."""

    def __init__(
        self,
        project: ProjectInfo,
        report_input: ReportInput,
        media: list[MediaItem],
        config: ReportConfig | None = None,
    ):
        """
        Initialize report builder.

        Args:
            project: Project the log belongs to
            report_input: The day's log
            media: All media recorded for the log (videos are skipped)
            config: Layout configuration
        """
        self.project = project
        self.report_input = report_input
        self.media = list(media)
        self.config = config or ReportConfig()
        self.photos = select_photos(self.media)

        self.frame_width = A4[0] - 2 * self.config.margin_pt
        register_font(self.config.font_name)
        self._styles = self._create_styles()

        logger.info(
            f"Initialized report builder: project '{project.name}', "
            f"date {report_input.log_date}, {len(self.photos)} photos "
            f"({len(self.media) - len(self.photos)} other media skipped)"
        )

    def _create_styles(self) -> dict[str, ParagraphStyle]:
        font = self.config.font_name
        return {
            "title": ParagraphStyle(
                "title", fontName=font, fontSize=18, leading=24, alignment=TA_CENTER, spaceAfter=12
            ),
            "heading": ParagraphStyle(
                "heading", fontName=font, fontSize=14, leading=18, spaceBefore=10, spaceAfter=6
            ),
            "body": ParagraphStyle("body", fontName=font, fontSize=11, leading=15, wordWrap="CJK"),
            "caption": ParagraphStyle(
                "caption", fontName=font, fontSize=8, leading=10, wordWrap="CJK", alignment=TA_CENTER
            ),
        }

    def _para(self, text: str, style: str = "body") -> Paragraph:
        markup = escape(text).replace("\n", "<br/>")
        return Paragraph(markup, self._styles[style])

    def _grid_style(self, *extra) -> TableStyle:
        return TableStyle(
            [
                ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("LEFTPADDING", (0, 0), (-1, -1), CELL_PADDING),
                ("RIGHTPADDING", (0, 0), (-1, -1), CELL_PADDING),
                *extra,
            ]
        )

    def _key_value_table(self, rows: list[tuple[str, str]]) -> Table:
        # Long values continue on rows with an empty label cell
        data = []
        commands = [
            ("BOX", (0, 0), (-1, -1), 0.5, colors.black),
            ("LINEAFTER", (0, 0), (0, -1), 0.5, colors.black),
            ("BACKGROUND", (0, 0), (0, -1), colors.whitesmoke),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("LEFTPADDING", (0, 0), (-1, -1), CELL_PADDING),
            ("RIGHTPADDING", (0, 0), (-1, -1), CELL_PADDING),
        ]
        for label, value in rows:
            if data:
                commands.append(("LINEABOVE", (0, len(data)), (-1, len(data)), 0.5, colors.black))
            first, *rest = split_rows(value)
            data.append([self._para(label), self._para(first)])
            data.extend(["", self._para(piece)] for piece in rest)

        return Table(
            data,
            colWidths=[LABEL_COLUMN_WIDTH, self.frame_width - LABEL_COLUMN_WIDTH],
            style=TableStyle(commands),
        )

    # ===== Section data =====

    def basic_info_rows(self) -> list[tuple[str, str]]:
        """Label/value pairs of the basic-info table."""
        log = self.report_input
        values = (
            self.project.name or log.project_name,
            log.log_date.strftime(constants.LOG_DATE_FORMAT),
            log.construction_site,
            self.project.manager or log.project_manager,
        )
        return list(zip(constants.BASIC_INFO_LABELS, values))

    def weather_rows(self) -> list[tuple[str, str]]:
        """Label/value pairs of the weather table."""
        log = self.report_input
        return list(zip(constants.WEATHER_LABELS, (log.weather_condition, log.temperature, log.wind)))

    def content_blocks(self) -> list[tuple[str, str]]:
        """(label, text) of the four free-text blocks, always all four."""
        return [(label, getattr(self.report_input, field)) for label, field in constants.CONTENT_SECTIONS]

    # ===== Sections =====

    def build_story(self) -> list[Flowable]:
        """All report sections in their fixed order."""
        story: list[Flowable] = []
        story.extend(self._title_section())
        story.extend(self._basic_info_section())
        story.extend(self._weather_section())
        for label, text in self.content_blocks():
            story.extend(self._content_section(label, text))
        story.extend(self._media_gallery())
        story.extend(self._signature_section())
        return story

    def _title_section(self) -> list[Flowable]:
        return [Paragraph(f"<b>{escape(self.config.title)}</b>", self._styles["title"])]

    def _basic_info_section(self) -> list[Flowable]:
        return [
            self._para(constants.SECTION_BASIC_INFO, "heading"),
            self._key_value_table(self.basic_info_rows()),
        ]

    def _weather_section(self) -> list[Flowable]:
        return [
            self._para(constants.SECTION_WEATHER, "heading"),
            self._key_value_table(self.weather_rows()),
        ]

    def _content_section(self, label: str, text: str) -> list[Flowable]:
        body = [[self._para(piece)] for piece in split_rows(text)]
        table = Table(
            [[self._para(label)]] + body,
            colWidths=[self.frame_width],
            rowHeights=[None] + [None if text else 40] * len(body),
            repeatRows=1,
            style=TableStyle(
                [
                    ("BOX", (0, 0), (-1, -1), 0.5, colors.black),
                    ("LINEBELOW", (0, 0), (0, 0), 0.5, colors.black),
                    ("BACKGROUND", (0, 0), (0, 0), colors.whitesmoke),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("LEFTPADDING", (0, 0), (-1, -1), CELL_PADDING),
                    ("RIGHTPADDING", (0, 0), (-1, -1), CELL_PADDING),
                ]
            ),
        )
        return [Spacer(1, 10), table]

    def _photo_cell(self, item: MediaItem, box: tuple[float, float]) -> list[Flowable]:
        """Scaled photo plus caption, or the failure placeholder plus caption."""
        caption = self._para(photo_caption(item), "caption")
        try:
            buffer, size = load_photo(item.file_path)
        except ImageProcessingError:
            logger.warning(f"Photo {item.file_path} could not be loaded, rendering placeholder")
            return [self._para(constants.IMAGE_FAILED_TEXT, "caption"), caption]

        width, height = fit_within(size, box)
        return [Image(buffer, width=width, height=height), caption]

    def _media_gallery(self) -> list[Flowable]:
        heading = self._para(constants.SECTION_MEDIA, "heading")
        if not self.photos:
            return [heading, self._para(constants.NO_PHOTOS_TEXT)]

        columns = self.config.gallery_columns
        column_width = self.frame_width / columns
        box = (column_width - 2 * CELL_PADDING, self.config.gallery_image_height_pt)

        cells = [self._photo_cell(item, box) for item in self.photos]
        rows = [cells[i:i + columns] for i in range(0, len(cells), columns)]
        rows[-1] = rows[-1] + [""] * (columns - len(rows[-1]))

        table = Table(
            rows,
            colWidths=[column_width] * columns,
            style=self._grid_style(
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("ALIGN", (0, 0), (-1, -1), "CENTER"),
            ),
        )
        return [heading, table]

    def _signature_section(self) -> list[Flowable]:
        rows = [(label, constants.SIGNATURE_LINE) for label in constants.SIGNATURE_LABELS]
        data = [[self._para(label), self._para(line)] for label, line in rows]
        table = Table(
            data,
            colWidths=[LABEL_COLUMN_WIDTH, self.frame_width - LABEL_COLUMN_WIDTH],
            rowHeights=[40] * len(data),
            style=self._grid_style(),
        )
        return [self._para(constants.SECTION_SIGNATURE, "heading"), table]

    def _draw_footer(self, canvas, doc) -> None:
        canvas.saveState()
        canvas.setFont(self.config.font_name, 9)
        canvas.drawCentredString(A4[0] / 2, self.config.margin_pt / 2, f"第 {doc.page} 页")
        canvas.restoreState()

    # ===== Output =====

    def generate_pdf(self, output_path: Path) -> Path:
        """
        Render the report to output_path.

        The PDF is written to a hidden temp file next to output_path and renamed
        into place, so the directory never holds a partial report. An existing
        report with the same name is replaced.

        Args:
            output_path: Path to save PDF

        Returns:
            Path to generated PDF

        Raises:
            ReportGenerationError: If the PDF cannot be produced or written
        """
        output_path = Path(output_path)
        logger.info(f"Generating PDF report: {output_path}")

        tmp_path: Path | None = None
        committed = False
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=output_path.parent, prefix=f".{output_path.stem}.", suffix=".part"
            )
            os.close(fd)
            tmp_path = Path(tmp_name)

            doc = SimpleDocTemplate(
                str(tmp_path),
                pagesize=A4,
                leftMargin=self.config.margin_pt,
                rightMargin=self.config.margin_pt,
                topMargin=self.config.margin_pt,
                bottomMargin=self.config.margin_pt,
                title=self.config.title,
                author=self.project.manager,
                subject=self.project.name,
            )
            doc.build(self.build_story(), onFirstPage=self._draw_footer, onLaterPages=self._draw_footer)

            tmp_path.chmod(0o644)
            _commit_file(tmp_path, output_path)
            committed = True

            logger.info(f"PDF report generated: {output_path.stat().st_size / 1_000:.1f} KB")
            return output_path

        except Exception as e:
            error_msg = f"Failed to generate PDF {output_path}: {e}"
            logger.error(error_msg)
            raise ReportGenerationError(error_msg) from e

        finally:
            if tmp_path is not None and not committed:
                tmp_path.unlink(missing_ok=True)
