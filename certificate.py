"""
Certificate-related logic for the certificate service.

Holds the request model and its validation, the error types surfaced by the
HTTP layer, and the fixed page layout. The layout is described declaratively
(`CERTIFICATE_LAYOUT`) and positioned by `layout_certificate`, which only needs
a text-measuring callable so it can be exercised without a PDF backend.
"""
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Mapping, Optional, Tuple, Union

from utils import allowed_image, is_blank

if TYPE_CHECKING:
    from uploads import StoredUpload

REQUIRED_FIELDS = ('name', 'course', 'date')

# Line unit = font size * LEADING
LEADING = 1.2
TOP_OFFSET = 180
MIN_FONT_SIZE = 8
SIDE_MARGIN = 40


class CertificateError(Exception):
    """Base error; `message` is safe to show to the client."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CertificateError):
    status_code = 400


class RenderError(CertificateError):
    status_code = 500


@dataclass
class CertificateRequest:
    name: str
    course: str
    date: str
    background: Optional['StoredUpload'] = None

    @property
    def background_path(self) -> Optional[str]:
        return self.background.path if self.background is not None else None

    @classmethod
    def from_fields(cls, fields: Mapping, background: Optional['StoredUpload'] = None) -> 'CertificateRequest':
        """Validate submitted text fields and the optional stored background.

        Raises ValidationError when a required field is missing or blank, or
        when the background's declared MIME type is not PNG or JPEG.
        """
        if any(is_blank(fields.get(key)) for key in REQUIRED_FIELDS):
            raise ValidationError('Missing required fields: name, course, date')
        if background is not None and not allowed_image(background.mimetype):
            raise ValidationError('Invalid image format. Only PNG and JPEG are supported.')
        return cls(
            name=fields.get('name'),
            course=fields.get('course'),
            date=fields.get('date'),
            background=background,
        )


@dataclass(frozen=True)
class TextLine:
    template: str
    font: str
    size: float
    color: str
    space_after: float = 0


@dataclass(frozen=True)
class Rule:
    width: float
    color: str
    line_width: float = 1
    space_after: float = 0


CERTIFICATE_LAYOUT: Tuple[Union[TextLine, Rule], ...] = (
    TextLine('CERTIFICATE OF COMPLETION', 'Helvetica-Bold', 30, '#333333', space_after=1.5),
    TextLine('This is to certify that', 'Helvetica', 14, '#555555', space_after=1),
    TextLine('{name}', 'Times-Bold', 42, '#000000', space_after=0.5),
    Rule(300, '#aaaaaa', line_width=1, space_after=1.5),
    TextLine('has successfully completed the course', 'Helvetica', 14, '#555555', space_after=1),
    TextLine('{course}', 'Helvetica-Bold', 26, '#333333', space_after=2),
    TextLine('Awarded on {date}', 'Helvetica', 12, '#555555'),
)


@dataclass(frozen=True)
class PlacedText:
    text: str
    font: str
    size: float
    color: str
    x: float
    y: float


@dataclass(frozen=True)
class PlacedRule:
    x1: float
    x2: float
    y: float
    color: str
    line_width: float


Measure = Callable[[str, str, float], float]


def _fit_size(text: str, font: str, size: float, max_width: float, measure: Measure) -> float:
    while size > MIN_FONT_SIZE and measure(text, font, size) > max_width:
        size -= 1
    return max(size, MIN_FONT_SIZE)


def layout_certificate(name: str, course: str, date: str, page_width: float, page_height: float,
                       measure: Measure, items=CERTIFICATE_LAYOUT) -> List[Union[PlacedText, PlacedRule]]:
    """Position every layout item on the page, in draw order.

    Coordinates are PDF user space (origin bottom-left). The cursor runs from
    the top of the page downwards; each text line advances it by one line unit
    and every item then moves it on by `space_after` line units. A rule uses
    the line unit of the text line drawn before it.
    """
    placed = []
    cursor = TOP_OFFSET
    line_unit = 0
    for item in items:
        if isinstance(item, TextLine):
            text = item.template.format(name=name, course=course, date=date)
            size = _fit_size(text, item.font, item.size, page_width - 2 * SIDE_MARGIN, measure)
            width = measure(text, item.font, size)
            placed.append(PlacedText(
                text=text,
                font=item.font,
                size=size,
                color=item.color,
                x=(page_width - width) / 2,
                y=page_height - cursor - size,
            ))
            line_unit = size * LEADING
            cursor += line_unit
        elif isinstance(item, Rule):
            half = item.width / 2
            placed.append(PlacedRule(
                x1=page_width / 2 - half,
                x2=page_width / 2 + half,
                y=page_height - cursor,
                color=item.color,
                line_width=item.line_width,
            ))
        else:
            raise TypeError(f'Unsupported layout item: {item!r}')
        cursor += item.space_after * line_unit
    return placed
