"""Reading and writing site.xml documents."""

from __future__ import annotations

from pathlib import Path

import pytest

from site_skinner.core.tree import XmlNode
from site_skinner.errors import DescriptorIOFailure
from site_skinner.site.codec import XmlDescriptorCodec
from site_skinner.site.descriptor import SiteDescriptor, Skin

FULL_SITE = """<?xml version="1.0" encoding="ISO-8859-1"?>
<project xmlns="http://maven.apache.org/DECORATION/1.0.0"
         xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
         xsi:schemaLocation="http://maven.apache.org/DECORATION/1.0.0 decoration-1.0.0.xsd"
         name="Widget">
  <bannerLeft><name>Widget</name><src>images/logo.png</src></bannerLeft>
  <googleAnalyticsAccountId>UA-1234</googleAnalyticsAccountId>
  <publishDate position="right" format="dd MMM yyyy"/>
  <version position="left"/>
  <skin>
    <groupId>org.apache.maven.skins</groupId>
    <artifactId>maven-fluido-skin</artifactId>
    <version>1.3.1</version>
  </skin>
  <body>
    <links><item name="Apache" href="https://apache.org"/></links>
    <breadcrumbs><item name="Home" href="index.html"/></breadcrumbs>
    <menu name="Overview"><item name="Intro" href="index.html"/></menu>
    <menu ref="reports"/>
    <footer>Café footer</footer>
  </body>
  <poweredBy><logo name="Maven" href="https://maven.apache.org"/></poweredBy>
  <custom><fluidoSkin><topBarEnabled>true</topBarEnabled></fluidoSkin></custom>
</project>
"""


@pytest.fixture
def site_file(tmp_path: Path) -> Path:
    path = tmp_path / "site.xml"
    path.write_bytes(FULL_SITE.encode("iso-8859-1"))
    return path


class TestRead:
    def test_reads_all_regions(self, site_file: Path) -> None:
        descriptor = XmlDescriptorCodec().read(site_file, "UTF-8")

        assert descriptor.name == "Widget"
        assert descriptor.model_encoding == "ISO-8859-1"
        assert descriptor.banner_left.child_value("src") == "images/logo.png"
        assert descriptor.google_analytics_account_id == "UA-1234"
        assert descriptor.publish_date.position == "right"
        assert descriptor.publish_date.effective_format == "dd MMM yyyy"
        assert descriptor.version.attributes == {"position": "left"}
        assert descriptor.skin == Skin("org.apache.maven.skins", "maven-fluido-skin", "1.3.1")
        assert [menu.attributes for menu in descriptor.menus] == [{"name": "Overview"}, {"ref": "reports"}]
        assert descriptor.body.footer.value == "Café footer"
        assert descriptor.custom.child("fluidoSkin").child_value("topBarEnabled") == "true"

    def test_keeps_namespace_attributes(self, site_file: Path) -> None:
        descriptor = XmlDescriptorCodec().read(site_file, "UTF-8")

        assert descriptor.root_attributes["xmlns"] == "http://maven.apache.org/DECORATION/1.0.0"
        assert descriptor.root_attributes["xsi:schemaLocation"].endswith("decoration-1.0.0.xsd")

    def test_input_encoding_used_without_declaration(self, tmp_path: Path) -> None:
        path = tmp_path / "site.xml"
        path.write_bytes('<project name="Café"/>'.encode("iso-8859-1"))

        descriptor = XmlDescriptorCodec().read(path, "ISO-8859-1")

        assert descriptor.name == "Café"
        assert descriptor.model_encoding is None

    def test_html_named_entities_are_accepted(self, tmp_path: Path) -> None:
        path = tmp_path / "site.xml"
        path.write_text(
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<project name="Widget"><body>'
            "<footer>&copy; 2011 ACME&nbsp;Inc. &amp; friends<![CDATA[ &reg; ]]></footer>"
            "</body></project>",
            encoding="utf-8",
        )

        descriptor = XmlDescriptorCodec().read(path, "UTF-8")

        assert descriptor.body.footer.value == "\u00a9 2011 ACME\u00a0Inc. & friends &reg; "

    def test_unknown_entity_is_still_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "site.xml"
        path.write_text("<project><body><footer>&bogus;</footer></body></project>", encoding="utf-8")

        with pytest.raises(DescriptorIOFailure):
            XmlDescriptorCodec().read(path, "UTF-8")

    def test_malformed_document(self, tmp_path: Path) -> None:
        path = tmp_path / "site.xml"
        path.write_text("<project><skin></project>", encoding="utf-8")

        with pytest.raises(DescriptorIOFailure):
            XmlDescriptorCodec().read(path, "UTF-8")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DescriptorIOFailure):
            XmlDescriptorCodec().read(tmp_path / "absent.xml", "UTF-8")


class TestWrite:
    def test_round_trip_preserves_content(self, site_file: Path, tmp_path: Path) -> None:
        codec = XmlDescriptorCodec()
        original = codec.read(site_file, "UTF-8")
        target = tmp_path / "out" / "site.xml"

        codec.write(target, original, "UTF-8")
        again = codec.read(target, "UTF-8")

        assert again.skin == original.skin
        assert again.name == original.name
        assert again.publish_date == original.publish_date
        assert again.body.footer.value == "Café footer"
        assert len(again.menus) == 2
        assert again.root_attributes == original.root_attributes

    def test_writes_with_descriptor_encoding(self, site_file: Path, tmp_path: Path) -> None:
        codec = XmlDescriptorCodec()
        descriptor = codec.read(site_file, "UTF-8")
        target = tmp_path / "site.xml"

        codec.write(target, descriptor, "UTF-8")

        raw = target.read_bytes()
        assert raw.startswith(b'<?xml version="1.0" encoding="ISO-8859-1"?>')
        assert "Café".encode("iso-8859-1") in raw

    def test_writes_with_output_encoding_by_default(self, tmp_path: Path) -> None:
        target = tmp_path / "site.xml"
        descriptor = SiteDescriptor(name="Café", skin=Skin("g", "a", "1"))

        XmlDescriptorCodec().write(target, descriptor, "UTF-8")

        text = target.read_text(encoding="utf-8")
        assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert 'name="Café"' in text

    def test_canonical_element_order(self, tmp_path: Path) -> None:
        descriptor = SiteDescriptor(
            custom=XmlNode("custom"),
            skin=Skin("g", "a", "1"),
            banner_left=XmlNode("bannerLeft"),
        )
        target = tmp_path / "site.xml"

        XmlDescriptorCodec().write(target, descriptor, "UTF-8")

        text = target.read_text(encoding="utf-8")
        assert text.index("<bannerLeft") < text.index("<skin>") < text.index("<custom")
