"""Unit tests for voice discovery."""

import threading

import pytest

from saykit import voices
from saykit.errors import SayUnavailableError
from saykit.mock import MockLauncher
from saykit.voices import DISCOVERY_FLAG, Voice, VoiceCatalogue, parse_voices

LISTING = (
    "Alex                en_US    # Most people recognize me by my voice.\n"
    "Alice               it_IT    # Salve, mi chiamo Alice e sono una voce italiana.\n"
    "Bad News            en_US    # The light you see at the end of the tunnel.\n"
    "Mei-Jia             zh_TW    # 您好，我叫美佳。我說國語。\n"
    "Samantha            en_US    # Hello, my name is Samantha.\n"
)


class TestParseVoices:
    """Tests for parse_voices."""

    def test_parses_example_line(self) -> None:
        """The canonical Alex line should parse into its three fields."""
        voices = parse_voices(
            "Alex                en_US    # Most people recognize me by my voice."
        )
        assert voices == [
            Voice(
                name="Alex",
                locale="en_US",
                comment="Most people recognize me by my voice.",
            )
        ]

    def test_preserves_order_and_fields(self) -> None:
        """Voices come back in listing order without mixing lines."""
        voices = parse_voices(LISTING)

        assert [v.name for v in voices] == [
            "Alex",
            "Alice",
            "Bad News",
            "Mei-Jia",
            "Samantha",
        ]
        assert voices[1].locale == "it_IT"
        assert voices[1].comment == "Salve, mi chiamo Alice e sono una voce italiana."
        assert voices[4].comment == "Hello, my name is Samantha."

    def test_name_with_spaces(self) -> None:
        """Names may contain single spaces."""
        voices = parse_voices(LISTING)
        assert voices[2] == Voice(
            "Bad News", "en_US", "The light you see at the end of the tunnel."
        )

    def test_unicode_comment(self) -> None:
        """Non-ASCII comments are kept verbatim."""
        voices = parse_voices(LISTING)
        assert voices[3].locale == "zh_TW"
        assert voices[3].comment == "您好，我叫美佳。我說國語。"

    def test_three_letter_language_and_long_region(self) -> None:
        """Locales allow 3-letter languages and 2+ letter regions."""
        voices = parse_voices("Kanya               tha_THAI # สวัสดีค่ะ\n")
        assert voices == [Voice("Kanya", "tha_THAI", "สวัสดีค่ะ")]

    def test_empty_output(self) -> None:
        """Empty output yields an empty list."""
        assert parse_voices("") == []

    def test_skips_malformed_lines(self) -> None:
        """Lines that do not match are skipped silently."""
        output = (
            "Alex                en_US    # Most people recognize me by my voice.\n"
            "not a voice line\n"
            "Short  en_US    # only two spaces before the locale\n"
            "Lower               EN_us    # wrong locale case\n"
            "NoMarker            en_US    missing hash\n"
            "\n"
            "Samantha            en_US    # Hello, my name is Samantha.\n"
        )
        voices = parse_voices(output)
        assert [v.name for v in voices] == ["Alex", "Samantha"]

    def test_skips_line_without_name(self) -> None:
        """A line with no name before the locale is not a voice."""
        assert parse_voices("        en_US    # nameless\n") == []

    def test_comment_strips_only_marker_space(self) -> None:
        """Only the single space after '#' is removed from the comment."""
        voices = parse_voices("Fred                en_US    #  I sure like being inside.\n")
        assert voices[0].comment == " I sure like being inside."


class TestVoice:
    """Tests for the Voice record."""

    def test_voice_is_immutable(self) -> None:
        """Voice fields cannot be reassigned."""
        voice = Voice("Alex", "en_US", "Hi")
        with pytest.raises(AttributeError):
            voice.name = "Fred"  # type: ignore[misc]

    def test_str(self) -> None:
        """String form shows name, locale and comment."""
        voice = Voice("Alex", "en_US", "Hi")
        assert str(voice) == "<Voice: 'Alex'(en_US), 'Hi'>"

    def test_direct_construction_is_not_validated(self) -> None:
        """Callers may build voices by hand."""
        voice = Voice("", "", "")
        assert voice.name == ""


class TestVoiceCatalogue:
    """Tests for VoiceCatalogue."""

    def test_discovery_uses_voice_flag(self) -> None:
        """Discovery runs the tool with --voice=?."""
        launcher = MockLauncher(listing=LISTING)
        VoiceCatalogue(launcher).voices()
        assert launcher.captures == [[DISCOVERY_FLAG]]
        assert DISCOVERY_FLAG == "--voice=?"

    def test_is_lazy(self) -> None:
        """Nothing is launched until voices are requested."""
        launcher = MockLauncher(listing=LISTING)
        catalogue = VoiceCatalogue(launcher)
        assert launcher.captures == []
        assert catalogue.is_loaded is False

    def test_memoizes(self) -> None:
        """Two calls return equal lists and launch discovery once."""
        launcher = MockLauncher(listing=LISTING)
        catalogue = VoiceCatalogue(launcher)

        first = catalogue.voices()
        second = catalogue.voices()

        assert first == second
        assert len(first) == 5
        assert len(launcher.captures) == 1
        assert catalogue.is_loaded is True

    def test_returned_list_is_a_copy(self) -> None:
        """Mutating the returned list does not change the cache."""
        catalogue = VoiceCatalogue(MockLauncher(listing=LISTING))
        catalogue.voices().clear()
        assert len(catalogue.voices()) == 5

    def test_empty_listing(self) -> None:
        """No matching lines gives an empty catalogue, not an error."""
        catalogue = VoiceCatalogue(MockLauncher(listing="garbage\n"))
        assert catalogue.voices() == []

    def test_unavailable_tool_raises(self) -> None:
        """A missing tool is reported as SayUnavailableError."""
        catalogue = VoiceCatalogue(MockLauncher(available=False))
        with pytest.raises(SayUnavailableError):
            catalogue.voices()

    def test_concurrent_first_access_launches_once(self) -> None:
        """Discovery runs once when many threads ask at the same time."""
        launcher = MockLauncher(listing=LISTING)
        catalogue = VoiceCatalogue(launcher)
        barrier = threading.Barrier(8)
        results: list[list[Voice]] = []

        def worker() -> None:
            barrier.wait()
            results.append(catalogue.voices())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(launcher.captures) == 1
        assert all(r == results[0] for r in results)

    def test_find_exact_match(self) -> None:
        """find returns the entry with the exact name."""
        catalogue = VoiceCatalogue(MockLauncher(listing=LISTING))
        assert catalogue.find("Samantha") == Voice(
            "Samantha", "en_US", "Hello, my name is Samantha."
        )

    def test_find_is_case_sensitive(self) -> None:
        """find does not match names in a different case."""
        catalogue = VoiceCatalogue(MockLauncher(listing=LISTING))
        assert catalogue.find("samantha") is None

    def test_find_returns_first_duplicate(self) -> None:
        """With duplicate names, the first entry wins."""
        listing = (
            "Alex                en_US    # First.\n"
            "Alex                en_GB    # Second.\n"
        )
        catalogue = VoiceCatalogue(MockLauncher(listing=listing))
        voice = catalogue.find("Alex")
        assert voice is not None
        assert voice.locale == "en_US"


@pytest.fixture
def system_launcher(monkeypatch: pytest.MonkeyPatch) -> MockLauncher:
    """Back the process-wide catalogue with a mock launcher."""
    launcher = MockLauncher(listing=LISTING)
    monkeypatch.setattr(voices, "_default_catalogue", None)
    monkeypatch.setattr(voices, "SubprocessLauncher", lambda: launcher)
    return launcher


class TestDefaultCatalogue:
    """Tests for the process-wide catalogue."""

    def test_default_catalogue_is_shared(self, system_launcher: MockLauncher) -> None:
        """default_catalogue returns the same instance every time."""
        assert voices.default_catalogue() is voices.default_catalogue()

    def test_list_voices_discovers_once(self, system_launcher: MockLauncher) -> None:
        """Two list_voices calls give equal lists and one discovery launch."""
        first = voices.list_voices()
        second = voices.list_voices()

        assert first == second
        assert first[0] == Voice(
            "Alex", "en_US", "Most people recognize me by my voice."
        )
        assert system_launcher.captures == [[DISCOVERY_FLAG]]

    def test_default_catalogue_created_once_across_threads(
        self, system_launcher: MockLauncher
    ) -> None:
        """Concurrent first calls share one catalogue and one discovery."""
        barrier = threading.Barrier(8)
        catalogues: list[VoiceCatalogue] = []

        def worker() -> None:
            barrier.wait()
            catalogues.append(voices.default_catalogue())
            voices.list_voices()

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert all(c is catalogues[0] for c in catalogues)
        assert len(system_launcher.captures) == 1

    def test_request_lookup_uses_default_catalogue(
        self, system_launcher: MockLauncher
    ) -> None:
        """with_voice_name without catalogue or launcher searches it."""
        from saykit.say import SayRequest

        request, found = SayRequest.with_voice_name("hi", "Samantha")

        assert found is True
        assert request.voice == voices.default_catalogue().find("Samantha")
        assert len(system_launcher.captures) == 1
