import pytest

from josaa_api.exceptions import LoadError
from josaa_api.models import GenderPolicy, InstituteType, Quota
from ingestion.common.interface.strategy_interface import ValidationResult
from ingestion.csv_ingestion.csv_loader import CsvSeatLoader, load_seat_store
from ingestion.csv_ingestion.record_standardizer import SeatRowStandardizer

GOOD_ROWS = [
    "1,IIT Bombay,Computer Science,AI,OPEN,Gender-Neutral,1,68,IIT,,Maharashtra",
    "2,NIT Trichy,Civil Engineering,HS,OBC-NCL,Female-only (including Supernumerary),5000,9000,NIT,31,Tamil Nadu",
    "3,NIT Trichy,Civil Engineering,OS,SC (PwD),Gender-Neutral,120P,340P,NIT,31,Tamil Nadu",
]


class TestLoader:

    def test_loads_typed_records(self, write_csv):
        store = load_seat_store(write_csv(GOOD_ROWS))
        assert store.count() == 3

        iit, nit_hs, nit_os = store.all()
        assert iit.institute_type == InstituteType.ADVANCED
        assert iit.quota == Quota.ALL_INDIA
        assert iit.state_id is None
        assert iit.closing_rank == 68

        assert nit_hs.institute_type == InstituteType.STANDARD
        assert nit_hs.quota == Quota.HOME_STATE
        assert nit_hs.state_id == 31
        assert nit_hs.gender_policy == GenderPolicy.FEMALE_ONLY

        # Preparatory ranks keep their leading integer
        assert (nit_os.opening_rank, nit_os.closing_rank) == (120, 340)

    def test_raw_row_is_preserved(self, write_csv):
        store = load_seat_store(write_csv(GOOD_ROWS))
        row = store.all()[0].as_row()
        assert row["Institute"] == "IIT Bombay"
        assert row["ClosingRank"] == "68"
        assert row["StateId"] == ""

    def test_stats(self, write_csv):
        stats = load_seat_store(write_csv(GOOD_ROWS)).stats
        assert stats.total_records == 3
        assert stats.unique_institutes == 2
        assert stats.unique_programs == 2
        assert stats.unique_quotas == 3
        assert stats.unique_genders == 2
        assert stats.unique_states == 2

    def test_inverted_ranks_are_kept(self, write_csv):
        store = load_seat_store(write_csv(["1,NIT A,Prog,AI,OPEN,Gender-Neutral,900,100,NIT,,"]))
        assert store.all()[0].opening_rank == 900

    def test_header_only_gives_empty_store(self, write_csv):
        assert load_seat_store(write_csv([])).count() == 0

    def test_columns_may_be_padded(self, write_csv):
        header = "Id, Institute ,Academic-Program-Name,Quota,SeatType,Gender,OpeningRank,ClosingRank,Type,StateId,State"
        store = load_seat_store(write_csv(GOOD_ROWS[:1], header=header))
        assert store.all()[0].institute == "IIT Bombay"


class TestLoadFailures:

    def test_missing_file(self, tmp_path):
        with pytest.raises(LoadError) as excinfo:
            load_seat_store(str(tmp_path / "nope.csv"))
        assert "not found" in str(excinfo.value)

    def test_empty_file(self, write_csv):
        path = write_csv([], header=None)
        with pytest.raises(LoadError):
            load_seat_store(path)

    def test_missing_required_column(self, write_csv):
        path = write_csv(["1,IIT X,Prog,AI,OPEN,Gender-Neutral,1"], header="Id,Institute,Academic-Program-Name,Quota,SeatType,Gender,OpeningRank")
        with pytest.raises(LoadError) as excinfo:
            load_seat_store(path)
        assert "ClosingRank" in str(excinfo.value)

    @pytest.mark.parametrize("bad_row", [
        "9,NIT A,Prog,AI,OPEN,Gender-Neutral,1,abc,NIT,,",           # non-numeric closing
        "9,NIT A,Prog,AI,OPEN,Gender-Neutral,0,10,NIT,,",            # zero opening
        "9,NIT A,Prog,AI,GENERAL,Gender-Neutral,1,10,NIT,,",         # unknown category
        "9,NIT A,Prog,AI,OPEN,Male-only,1,10,NIT,,",                 # unknown gender policy
        "9,NIT A,Prog,HS,OPEN,Gender-Neutral,1,10,NIT,seven,",       # non-numeric state id
        "9,,Prog,AI,OPEN,Gender-Neutral,1,10,NIT,,",                 # missing institute
        "9,NIT A,Prog,,OPEN,Gender-Neutral,1,10,NIT,,",              # missing quota
        "9,NIT A,Prog,AI,OPEN,Gender-Neutral,1,10,,,",               # missing type
    ])
    def test_one_bad_row_fails_the_whole_load(self, write_csv, bad_row):
        path = write_csv(GOOD_ROWS + [bad_row])
        with pytest.raises(LoadError) as excinfo:
            load_seat_store(path)
        assert excinfo.value.row_errors
        assert excinfo.value.row_errors[0].startswith("line 5:")


class TestStandardizer:

    @pytest.mark.parametrize("raw,expected", [
        ("123", 123), (" 45 ", 45), ("120P", 120), ("", None), ("P12", None), ("0", None), (None, None),
    ])
    def test_parse_rank(self, raw, expected):
        assert SeatRowStandardizer.parse_rank(raw) == expected

    def test_flag_for_inverted_ranks(self):
        row = {
            "Institute": "NIT A", "Academic-Program-Name": "Prog", "Quota": "AI", "SeatType": "OPEN",
            "Gender": "Gender-Neutral", "OpeningRank": "50", "ClosingRank": "10", "Type": "NIT",
        }
        result = SeatRowStandardizer.standardize(row, line_number=2)
        assert result.outcome == ValidationResult.FLAG
        assert result.record is not None

    def test_loader_slug(self):
        assert CsvSeatLoader().get_source_slug() == "csv"
