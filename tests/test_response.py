"""
Unit tests for PdfResponse
"""
import pytest
from unittest.mock import Mock, patch

from pdfresponse.constants import (
    EMPTY_DOCUMENT, Orientation, OutputDestination, RenderState, WriteMode
)
from pdfresponse.exceptions import ConfigError, RenderError, StateError
from pdfresponse.renderer import WeasyRenderer
from pdfresponse.response import PdfResponse
from pdfresponse.sources import JinjaTemplate


class TestPdfResponseDefaults:
    """Test default option values"""

    def test_defaults(self):
        response = PdfResponse('<p>x</p>')

        assert response.page_orientation is Orientation.PORTRAIT
        assert response.page_format == 'A4'
        assert response.page_margins == '16,15,16,15,9,9'
        assert response.document_title == 'Unnamed document'
        assert response.display_zoom == 'default'
        assert response.display_layout == 'continuous'
        assert response.output_destination is OutputDestination.INLINE
        assert response.output_name is None
        assert response.state is RenderState.UNINITIALIZED

    def test_get_margins(self):
        margins = PdfResponse('<p>x</p>').get_margins()
        assert margins.as_dict() == {
            'top': 16, 'right': 15, 'bottom': 16, 'left': 15, 'header': 9, 'footer': 9
        }

    def test_from_config(self):
        config = {'pdf': {'page_format': 'Letter', 'orientation': 'L', 'margins': '1,2,3,4,5,6',
                          'multi_language': True}}
        response = PdfResponse.from_config('<p>x</p>', config)

        assert response.page_format == 'Letter'
        assert response.page_orientation == 'L'
        assert response.page_margins == '1,2,3,4,5,6'
        assert response.multi_language is True
        assert response.document_title == 'Unnamed document'


class TestSourceHandling:
    """Test source access through the response"""

    def test_raw_source_missing(self):
        with pytest.raises(StateError, match='not defined'):
            PdfResponse(None).get_raw_source()

    def test_raw_string_unchanged(self):
        assert PdfResponse('<b>x</b>').get_source() == '<b>x</b>'
        assert PdfResponse('').get_source() == ''

    def test_template_gets_response_and_renderer(self, make_response, fake_renderer):
        template = JinjaTemplate.from_string('{{ pdf_response.document_title }}:{{ renderer.title is none }}')
        response = make_response(template, document_title='Invoice')

        assert response.get_source() == 'Invoice:True'
        assert template.pdf_response is response
        assert template.renderer is fake_renderer


class TestGetRenderer:
    """Test renderer creation and caching"""

    def test_renderer_is_cached(self):
        response = PdfResponse('<p>x</p>')
        factory = Mock(side_effect=lambda: Mock())
        response.create_renderer = factory

        first = response.get_renderer()
        second = response.get_renderer()

        assert first is second
        factory.assert_called_once_with()
        assert response.state is RenderState.READY

    def test_factory_not_callable(self):
        response = PdfResponse('<p>x</p>')
        response.create_renderer = None

        with pytest.raises(StateError, match='not callable'):
            response.get_renderer()

    def test_factory_returns_wrong_object(self):
        response = PdfResponse('<p>x</p>')
        response.create_renderer = lambda: object()

        with pytest.raises(StateError, match='renderer object'):
            response.get_renderer()

    def test_wrong_object_surfaces_from_send(self):
        response = PdfResponse('<p>x</p>')
        response.create_renderer = lambda: 'not a renderer'

        with pytest.raises(StateError):
            response.send()
        assert response.state is RenderState.FAILED

    def test_default_factory_builds_weasy_renderer(self):
        response = PdfResponse('<p>x</p>')
        response.page_orientation = 'landscape'

        renderer = response.get_renderer()

        assert isinstance(renderer, WeasyRenderer)
        assert renderer.options['orientation'] == 'L'
        assert renderer.options['margin_top'] == 16

    def test_open_print_dialog(self, make_response, fake_renderer):
        make_response().open_print_dialog()
        assert fake_renderer.scripts == ['print();']


class TestSend:
    """Test the send sequence"""

    def test_returns_bytes_for_string_destination(self, make_response, fake_renderer):
        result = make_response().send()

        assert result == b'%PDF-1.7 fake'
        assert fake_renderer.outputs == [('unnamed-document.pdf', OutputDestination.STRING)]

    def test_metadata_applied(self, make_response, fake_renderer):
        response = make_response(document_author='Ada', document_title='Specs',
                                 display_zoom=90, display_layout='two', multi_language=True)
        response.send()

        assert fake_renderer.author == 'Ada'
        assert fake_renderer.title == 'Specs'
        assert fake_renderer.display_mode == (90, 'two')
        assert fake_renderer.bidirectional is True

    def test_full_parse_mode_by_default(self, make_response, fake_renderer):
        make_response('<p>Hi</p>').send()
        assert fake_renderer.writes == [('<p>Hi</p>', WriteMode.DEFAULT)]

    def test_empty_source_replaced(self, make_response, fake_renderer):
        make_response('').send()

        html, _ = fake_renderer.writes[0]
        assert html == EMPTY_DOCUMENT
        assert html != ''

    def test_stripped_to_nothing_is_replaced(self, make_response, fake_renderer):
        make_response('<!-- only a comment --><style>p{}</style>', ignore_styles_in_html=True).send()

        html, mode = fake_renderer.writes[0]
        assert mode is WriteMode.HTML_BODY
        assert html == EMPTY_DOCUMENT

    def test_styles_written_after_content(self, make_response, fake_renderer):
        make_response('<p>Hi</p>', styles='p { color: blue }').send()

        assert fake_renderer.writes == [
            ('<p>Hi</p>', WriteMode.DEFAULT),
            ('p { color: blue }', WriteMode.HEADER_CSS),
        ]

    def test_ignore_styles(self, make_response, fake_renderer):
        html = '<html><body><style>color:red</style><p>Sibling</p></body></html>'
        make_response(html, ignore_styles_in_html=True).send()

        written, mode = fake_renderer.writes[0]
        assert mode is WriteMode.HTML_BODY
        assert 'color:red' not in written
        assert '<p>Sibling</p>' in written

    def test_dom_options_used(self, make_response, fake_renderer):
        html = '<p style="color: red">x</p>'
        make_response(html, ignore_styles_in_html=True, dom_options={'remove_styles': True}).send()

        written, _ = fake_renderer.writes[0]
        assert written == '<p>x</p>'

    def test_output_name_derived_from_title(self, make_response, fake_renderer):
        response = make_response(document_title='My Report!')
        response.send()

        assert response.output_name == 'my-report.pdf'
        assert fake_renderer.outputs[0][0] == 'my-report.pdf'

    def test_explicit_output_name_kept(self, make_response, fake_renderer):
        response = make_response(output_name='out/custom.pdf',
                                 output_destination=OutputDestination.FILE)
        assert response.send() is None
        assert fake_renderer.outputs == [('out/custom.pdf', OutputDestination.FILE)]

    def test_destination_given_as_string(self, make_response, fake_renderer):
        make_response(output_destination='D').send()
        assert fake_renderer.outputs[0][1] is OutputDestination.DOWNLOAD

    def test_invalid_destination(self, make_response, fake_renderer):
        with pytest.raises(ConfigError, match='destination'):
            make_response(output_destination='X').send()
        assert fake_renderer.writes == []

    def test_invalid_display_mode(self, make_response, fake_renderer):
        with pytest.raises(ConfigError):
            make_response(display_zoom='enormous').send()
        assert fake_renderer.writes == []

    def test_hooks_run_in_order(self, make_response, fake_renderer):
        calls = []
        response = make_response()
        response.on_before_write.append(lambda r: calls.append(('write', len(fake_renderer.writes))))
        response.on_before_complete.append(lambda r: calls.append(('complete', len(fake_renderer.outputs))))

        response.send()

        assert calls == [('write', 0), ('complete', 0)]

    def test_failing_hook_does_not_abort(self, make_response, fake_renderer):
        response = make_response()
        response.on_before_write.append(Mock(side_effect=ValueError('hook failed')))
        response.on_before_complete.append(Mock(side_effect=KeyError('also failed')))

        assert response.send() == b'%PDF-1.7 fake'
        assert response.state is RenderState.FINALIZED

    def test_renderer_failure_wrapped(self, make_response, fake_renderer):
        cause = OSError('disk full')
        fake_renderer.output = Mock(side_effect=cause)
        response = make_response()

        with pytest.raises(RenderError) as exc_info:
            response.send()

        assert exc_info.value.__cause__ is cause
        assert response.state is RenderState.FAILED

    def test_template_failure_wrapped(self, make_response):
        template = JinjaTemplate.from_string('{{ missing.attribute.chain }}')

        with pytest.raises(RenderError):
            make_response(template).send()

    def test_send_is_single_use(self, make_response):
        response = make_response()
        response.send()

        with pytest.raises(StateError, match='already been sent'):
            response.send()

    def test_send_after_failure_rejected(self, make_response, fake_renderer):
        fake_renderer.write_html = Mock(side_effect=RuntimeError('bad html'))
        response = make_response()

        with pytest.raises(RenderError):
            response.send()
        with pytest.raises(StateError):
            response.send()


class TestHeaders:
    """Test HTTP header generation"""

    def test_inline(self):
        response = PdfResponse('<p>x</p>')
        response.document_title = 'Annual Report'

        assert response.headers == {
            'Content-Type': 'application/pdf',
            'Content-Disposition': 'inline; filename="annual-report.pdf"',
        }

    def test_download(self):
        response = PdfResponse('<p>x</p>')
        response.output_destination = OutputDestination.DOWNLOAD
        response.output_name = 'data.pdf'

        assert response.headers['Content-Disposition'] == 'attachment; filename="data.pdf"'
