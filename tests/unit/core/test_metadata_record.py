"""Tests pour l'objet valeur MetadataRecord."""

from src.core.value_objects import DEFAULT_DESCRIPTION, MetadataRecord


class TestMetadataRecordFillMissing:
    """Remplissage des champs manquants sans ecrasement."""

    def test_fills_all_fields_of_empty_record(self):
        record = MetadataRecord().fill_missing("My Show", 5)

        assert record.series_title == "My Show"
        assert record.display_title == "My Show"
        assert record.episode_number == 5

    def test_never_overwrites_existing_values(self):
        """Une surcharge manuelle n'est jamais ecrasee par le parser."""
        original = MetadataRecord(display_title="Custom", series_title="Custom Series")

        record = original.fill_missing("Parsed", 3)

        assert record.display_title == "Custom"
        assert record.series_title == "Custom Series"
        assert record.episode_number == 3

    def test_episode_zero_is_not_missing(self):
        record = MetadataRecord(display_title="A", series_title="A", episode_number=0)

        assert record.missing_fields() == []
        assert record.fill_missing("B", 9) is record

    def test_empty_string_title_is_missing(self):
        record = MetadataRecord(display_title="", series_title="", episode_number=1)

        assert set(record.missing_fields()) == {"display_title", "series_title"}

    def test_returns_same_instance_when_nothing_to_fill(self):
        """Rien a completer (parser sans episode) : meme instance."""
        record = MetadataRecord(display_title="A", series_title="A")

        assert record.fill_missing("A", None) is record


class TestMetadataRecordSerialization:
    """Conversion depuis et vers le document JSON."""

    def test_to_dict_omits_absent_fields(self):
        data = MetadataRecord(series_title="S", episode_number=2).to_dict()

        assert data == {"series_title": "S", "episode_number": 2}

    def test_default_description_is_not_persisted(self):
        record = MetadataRecord(series_title="S")

        assert record.description_or_default == DEFAULT_DESCRIPTION
        assert "description" not in record.to_dict()

    def test_unknown_keys_are_preserved(self):
        data = {"series_title": "S", "rating": 4.5}

        assert MetadataRecord.from_dict(data).to_dict() == data

    def test_invalid_types_are_treated_as_absent(self):
        record = MetadataRecord.from_dict(
            {"series_title": 12, "episode_number": True, "description": None}
        )

        assert record.series_title is None
        assert record.episode_number is None
        assert record.description is None

    def test_numeric_episode_string_is_accepted(self):
        assert MetadataRecord.from_dict({"episode_number": " 7 "}).episode_number == 7
