"""
Unit tests for the render-time configuration snapshot
"""
import pytest

from pdfresponse.config import DocumentConfig, build_config, check_display_mode
from pdfresponse.constants import Orientation
from pdfresponse.exceptions import ConfigError
from pdfresponse.response import PdfResponse


class TestBuildConfig:
    """Test build_config functionality"""

    def test_defaults(self):
        config = build_config(PdfResponse('<p>x</p>'))

        assert isinstance(config, DocumentConfig)
        assert config.page_format == 'A4'
        assert config.orientation is Orientation.PORTRAIT
        assert config.margins.top == 16
        assert config.mode == 'utf-8'
        assert config.temp_dir is None

    def test_renderer_options_without_temp_dir(self):
        options = build_config(PdfResponse('<p>x</p>')).renderer_options()

        assert options == {
            'mode': 'utf-8',
            'format': 'A4',
            'margin_left': 15,
            'margin_right': 15,
            'margin_top': 16,
            'margin_bottom': 16,
            'margin_header': 9,
            'margin_footer': 9,
            'orientation': 'P',
        }

    def test_renderer_options_with_temp_dir(self, temp_dir):
        response = PdfResponse('<p>x</p>')
        response.temp_dir = str(temp_dir)
        response.page_orientation = 'landscape'
        response.page_format = 'Letter'

        options = build_config(response).renderer_options()

        assert options['temp_dir'] == str(temp_dir)
        assert options['orientation'] == 'L'
        assert options['format'] == 'Letter'

    def test_invalid_orientation(self):
        response = PdfResponse('<p>x</p>')
        response.page_orientation = 'sideways'

        with pytest.raises(ConfigError, match='orientation'):
            build_config(response)

    def test_invalid_margins_propagate(self):
        response = PdfResponse('<p>x</p>')
        response.page_margins = '1,2'

        with pytest.raises(ConfigError):
            build_config(response)

    def test_snapshot_is_detached(self):
        response = PdfResponse('<p>x</p>')
        config = build_config(response)
        response.document_title = 'Changed later'

        assert config.title == 'Unnamed document'


class TestCheckDisplayMode:
    """Test display mode validation"""

    @pytest.mark.parametrize('zoom', ['fullpage', 'fullwidth', 'real', 'default', 90])
    def test_valid_zoom(self, zoom):
        assert check_display_mode(zoom, 'continuous') == (zoom, 'continuous')

    def test_numeric_string_zoom(self):
        assert check_display_mode('75', 'two') == (75, 'two')

    @pytest.mark.parametrize('zoom', ['huge', 0, -5, True])
    def test_invalid_zoom(self, zoom):
        with pytest.raises(ConfigError):
            check_display_mode(zoom, 'single')

    def test_invalid_layout(self):
        with pytest.raises(ConfigError, match='layout'):
            check_display_mode('default', 'three')
