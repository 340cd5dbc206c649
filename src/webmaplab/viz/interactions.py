"""
Pointer interactions: coordinate readouts, the onboarding message and the
single user-placed marker.

The Python classes model the page elements so MapShell can be driven
without a browser. MapInteractions emits the same behaviour as Leaflet
event handlers in the rendered page.
"""

from branca.element import MacroElement, Template

from webmaplab.config import COORDINATE_DECIMALS, ONBOARDING_DELAY_S
from webmaplab.constants import CLICK_OUTPUT_ID, HOVER_OUTPUT_ID, ONBOARDING_ID, TRANSIENT_MARKER_POPUP


def format_coordinates(lat, lng, decimals=COORDINATE_DECIMALS):
    """
    Format a lat/lng pair for display.

    Parameters

    lat, lng : float
        Event coordinates
    decimals : int, optional
        Digits after the decimal point

    Returns

    str
        "lat, lng", e.g. "53.53, -113.51"
    """
    return f"{lat:.{decimals}f}, {lng:.{decimals}f}"


class TextOutput:
    """A page element whose text is replaced by readouts."""

    def __init__(self, element_id, text=""):
        self.element_id = element_id
        self.text = text

    def write(self, text):
        self.text = text


class OnboardingMessage:
    """The getting-started banner. Once hidden it stays hidden."""

    def __init__(self, element_id=ONBOARDING_ID, text="Click anywhere on the map to mark a possible enemy location."):
        self.element_id = element_id
        self.text = text
        self.hidden = False

    def hide(self):
        self.hidden = True


class MapInteractions(MacroElement):
    """
    Browser side of MapShell's handlers.

    Hovering writes coordinates to the hover output. Clicking hides the
    onboarding message, writes coordinates to the click output and moves the
    single user marker to the clicked point. The onboarding message also
    hides itself after a fixed delay.
    """

    _template = Template("""
        {% macro header(this, kwargs) %}
            <style>
                .webmaplab-readouts {
                    position: absolute; bottom: 30px; left: 10px; z-index: 1000;
                    background: rgba(255, 255, 255, 0.85); padding: 4px 8px;
                    border-radius: 4px; font: 12px sans-serif;
                }
                .webmaplab-onboarding {
                    position: absolute; top: 10px; left: 50%; z-index: 1000;
                    transform: translateX(-50%); background: #fff; padding: 8px 12px;
                    border-radius: 4px; box-shadow: 0 1px 4px rgba(0, 0, 0, 0.3);
                    transition: opacity 0.5s ease, top 0.5s ease;
                }
                .webmaplab-onboarding.slide-up { top: -60px; opacity: 0; }
                .d-none { display: none !important; }
            </style>
        {% endmacro %}

        {% macro html(this, kwargs) %}
            <div id="{{ this.onboarding.element_id }}" class="webmaplab-onboarding">{{ this.onboarding.text|e }}</div>
            <div class="webmaplab-readouts">
                Mouse: <span id="{{ this.hover_output.element_id }}"></span>
                | Click: <span id="{{ this.click_output.element_id }}"></span>
            </div>
        {% endmacro %}

        {% macro script(this, kwargs) %}
            (function () {
                var map = {{ this._parent.get_name() }};
                var decimals = {{ this.decimals }};
                var userInput = null;

                function el(id) { return document.getElementById(id); }

                function formatLatLng(e) {
                    return e.latlng.lat.toFixed(decimals) + ', ' + e.latlng.lng.toFixed(decimals);
                }

                function hide(node) {
                    if (!node.classList.contains('d-none')) {
                        node.classList.add('slide-up');
                    }
                    window.setTimeout(function () { node.classList.add('d-none'); }, 500);
                }

                map.on('mousemove', function (e) {
                    el({{ this.hover_output.element_id|tojson }}).innerHTML = formatLatLng(e);
                });

                map.on('click', function (e) {
                    hide(el({{ this.onboarding.element_id|tojson }}));
                    el({{ this.click_output.element_id|tojson }}).innerHTML = formatLatLng(e);

                    if (userInput !== null) {
                        map.removeLayer(userInput);
                    }
                    userInput = L.marker(e.latlng).addTo(map).bindPopup({{ this.marker_popup|tojson }});
                });

                window.setTimeout(function () {
                    hide(el({{ this.onboarding.element_id|tojson }}));
                }, {{ this.delay_ms }});
            })();
        {% endmacro %}
    """)

    def __init__(
        self,
        click_output=None,
        hover_output=None,
        onboarding=None,
        delay=ONBOARDING_DELAY_S,
        decimals=COORDINATE_DECIMALS,
        marker_popup=TRANSIENT_MARKER_POPUP,
    ):
        super().__init__()
        self._name = "MapInteractions"
        self.click_output = click_output or TextOutput(CLICK_OUTPUT_ID)
        self.hover_output = hover_output or TextOutput(HOVER_OUTPUT_ID)
        self.onboarding = onboarding or OnboardingMessage()
        self.delay_ms = int(delay * 1000)
        self.decimals = decimals
        self.marker_popup = marker_popup
