"""
Test railway network covering the enrichment scenarios.

Network structure:
- 2 companies (a metro operator and a rail operator)
- 7 lines, including one with a gap in its symbol slots, one without symbol
  shapes, one without symbols and one soft-deleted line
- A 3-line interchange (CENTRAL_HUB) whose group members share coordinates
- A station whose home line is inactive (ORPHAN), used for inconsistent data
- Two service patterns (local stops everywhere, rapid passes NORTH_GATE)

Naming convention:
- Lines: LINE_<NAME>, ids 11001..11007
- Stations: STATION_<NAME>, ids 1000xx; groups GROUP_<NAME>
"""

from stationapi.domain.entities import Company, Line, Station, StopCondition, TrainType
from stationapi.domain.slots import SlotTriple


class TestRailwayNetwork:
    """Factory for the shared test network (fresh objects on every call)."""

    __test__ = False

    # -----------------------------------------------------------------------------
    # Companies
    # -----------------------------------------------------------------------------
    COMPANY_METRO = 1
    COMPANY_RAIL = 2

    # -----------------------------------------------------------------------------
    # Lines
    # -----------------------------------------------------------------------------
    LINE_AMBER = 11001  # symbol "A", one slot
    LINE_CRIMSON = 11002  # symbols "C" / "Cb", second color falls back to line color
    LINE_SPARSE = 11003  # symbols "S", None, "X" (extra slot never read)
    LINE_PLAIN = 11004  # no symbols
    LINE_SHAPELESS = 11005  # symbol "K" but no shapes
    LINE_CLOSED = 11006  # soft-deleted
    LINE_COAST = 11007  # rail operator, serves the hub

    # -----------------------------------------------------------------------------
    # Station groups and stations
    # -----------------------------------------------------------------------------
    GROUP_CENTRAL_HUB = 100100
    STATION_HUB_AMBER = 100101
    STATION_HUB_CRIMSON = 100102
    STATION_HUB_COAST = 100103

    GROUP_NORTH_GATE = 100200
    STATION_NORTH_GATE = 100201

    GROUP_SPARSE_JUNCTION = 100300
    STATION_SPARSE_JUNCTION = 100301

    GROUP_PLAIN_HALT = 100400
    STATION_PLAIN_HALT = 100401

    GROUP_KILN = 100500
    STATION_KILN = 100501

    GROUP_ORPHAN = 100600
    STATION_ORPHAN = 100601

    GROUP_RETIRED = 100700
    STATION_RETIRED = 100701  # soft-deleted station on LINE_AMBER

    # -----------------------------------------------------------------------------
    # Service patterns
    # -----------------------------------------------------------------------------
    LINE_GROUP_AMBER_LOCAL = 500
    LINE_GROUP_AMBER_RAPID = 501
    TYPE_LOCAL = 1
    TYPE_RAPID = 2

    HUB_LAT = 35.681236
    HUB_LON = 139.767125

    # ==================== Companies ====================

    @staticmethod
    def create_metro_company() -> Company:
        return Company(
            company_cd=TestRailwayNetwork.COMPANY_METRO,
            rr_cd=99,
            company_name="メトロ交通",
            company_name_k="メトロコウツウ",
            company_name_h="メトロ交通株式会社",
            company_name_r="Metro Transit",
            company_name_en="Metro Transit",
            company_name_full_en="Metro Transit Co., Ltd.",
            company_url="https://metro.example.com",
            company_type=1,
            e_status=0,
            e_sort=1,
        )

    @staticmethod
    def create_rail_company() -> Company:
        return Company(
            company_cd=TestRailwayNetwork.COMPANY_RAIL,
            rr_cd=11,
            company_name="海岸鉄道",
            company_name_k="カイガンテツドウ",
            company_name_h="海岸鉄道株式会社",
            company_name_r="Coast Railway",
            company_name_en="Coast Railway",
            company_name_full_en="Coast Railway Co., Ltd.",
            company_url="https://coast.example.com",
            company_type=2,
            e_status=0,
            e_sort=2,
        )

    # ==================== Lines ====================

    @staticmethod
    def create_amber_line() -> Line:
        return Line(
            line_cd=TestRailwayNetwork.LINE_AMBER,
            company_cd=TestRailwayNetwork.COMPANY_METRO,
            line_name="琥珀線",
            line_name_k="コハクセン",
            line_name_h="琥珀線",
            line_name_r="Amber Line",
            line_name_zh="琥珀线",
            line_name_ko="호박선",
            line_color_c="#F39700",
            line_type=3,
            symbols=SlotTriple("A"),
            symbol_shapes=SlotTriple("ROUND"),
            e_sort=1,
            average_distance=1.1,
        )

    @staticmethod
    def create_crimson_line() -> Line:
        return Line(
            line_cd=TestRailwayNetwork.LINE_CRIMSON,
            company_cd=TestRailwayNetwork.COMPANY_METRO,
            line_name="深紅線",
            line_name_k="シンクセン",
            line_name_h="深紅線",
            line_name_r="Crimson Line",
            line_color_c="#F62E36",
            line_type=3,
            symbols=SlotTriple("C", "Cb"),
            symbol_colors=SlotTriple("#E60012"),
            symbol_shapes=SlotTriple("ROUND", "ROUND"),
            e_sort=2,
            average_distance=1.2,
        )

    @staticmethod
    def create_sparse_line() -> Line:
        return Line(
            line_cd=TestRailwayNetwork.LINE_SPARSE,
            company_cd=TestRailwayNetwork.COMPANY_METRO,
            line_name="疎線",
            line_name_k="ソセン",
            line_name_h="疎線",
            line_name_r="Sparse Line",
            line_color_c="#00A7DB",
            line_type=3,
            symbols=SlotTriple("S", None, "X"),
            symbol_shapes=SlotTriple("SQUARE", None, "SQUARE"),
            e_sort=3,
        )

    @staticmethod
    def create_plain_line() -> Line:
        return Line(
            line_cd=TestRailwayNetwork.LINE_PLAIN,
            company_cd=TestRailwayNetwork.COMPANY_RAIL,
            line_name="平野線",
            line_name_k="ヘイヤセン",
            line_name_h="平野線",
            line_name_r="Plain Line",
            line_color_c="#888888",
            line_type=2,
            e_sort=4,
        )

    @staticmethod
    def create_shapeless_line() -> Line:
        return Line(
            line_cd=TestRailwayNetwork.LINE_SHAPELESS,
            company_cd=TestRailwayNetwork.COMPANY_RAIL,
            line_name="窯線",
            line_name_k="カマセン",
            line_name_h="窯線",
            line_name_r="Kiln Line",
            line_color_c="#6C272D",
            line_type=2,
            symbols=SlotTriple("K"),
            e_sort=5,
        )

    @staticmethod
    def create_closed_line() -> Line:
        return Line(
            line_cd=TestRailwayNetwork.LINE_CLOSED,
            company_cd=TestRailwayNetwork.COMPANY_RAIL,
            line_name="廃線",
            line_name_k="ハイセン",
            line_name_h="廃線",
            line_name_r="Closed Line",
            line_color_c="#000000",
            symbols=SlotTriple("Z"),
            symbol_shapes=SlotTriple("ROUND"),
            e_status=1,
            e_sort=6,
        )

    @staticmethod
    def create_coast_line() -> Line:
        return Line(
            line_cd=TestRailwayNetwork.LINE_COAST,
            company_cd=TestRailwayNetwork.COMPANY_RAIL,
            line_name="海岸線",
            line_name_k="カイガンセン",
            line_name_h="海岸線",
            line_name_r="Coast Line",
            line_color_c="#80C241",
            line_type=2,
            symbols=SlotTriple("CO"),
            symbol_colors=SlotTriple("#1D2088"),
            symbol_shapes=SlotTriple("REVERSED_ROUND"),
            e_sort=7,
        )

    # ==================== Stations ====================

    @staticmethod
    def _station(
        station_cd: int,
        station_g_cd: int,
        line_cd: int,
        name: str,
        name_k: str,
        name_r: str,
        *,
        lat: float,
        lon: float,
        numbers: SlotTriple | None = None,
        name_zh: str | None = None,
        name_ko: str | None = None,
        e_status: int = 0,
    ) -> Station:
        return Station(
            station_cd=station_cd,
            station_g_cd=station_g_cd,
            station_name=name,
            station_name_k=name_k,
            station_name_r=name_r,
            station_name_zh=name_zh,
            station_name_ko=name_ko,
            line_cd=line_cd,
            pref_cd=13,
            lat=lat,
            lon=lon,
            numbers=numbers or SlotTriple(),
            post="100-0005",
            address="Test Ward 1-1",
            open_ymd="1914-12-20",
            close_ymd="",
            e_status=e_status,
            e_sort=station_cd,
        )

    @staticmethod
    def create_hub_amber() -> Station:
        return TestRailwayNetwork._station(
            TestRailwayNetwork.STATION_HUB_AMBER,
            TestRailwayNetwork.GROUP_CENTRAL_HUB,
            TestRailwayNetwork.LINE_AMBER,
            "中央",
            "チュウオウ",
            "Central",
            lat=TestRailwayNetwork.HUB_LAT,
            lon=TestRailwayNetwork.HUB_LON,
            numbers=SlotTriple("09"),
            name_zh="中央站",
            name_ko="중앙",
        )

    @staticmethod
    def create_hub_crimson() -> Station:
        return TestRailwayNetwork._station(
            TestRailwayNetwork.STATION_HUB_CRIMSON,
            TestRailwayNetwork.GROUP_CENTRAL_HUB,
            TestRailwayNetwork.LINE_CRIMSON,
            "中央",
            "チュウオウ",
            "Central",
            lat=TestRailwayNetwork.HUB_LAT,
            lon=TestRailwayNetwork.HUB_LON,
            numbers=SlotTriple("16", "03"),
            name_zh="中央站",
            name_ko="중앙",
        )

    @staticmethod
    def create_hub_coast() -> Station:
        return TestRailwayNetwork._station(
            TestRailwayNetwork.STATION_HUB_COAST,
            TestRailwayNetwork.GROUP_CENTRAL_HUB,
            TestRailwayNetwork.LINE_COAST,
            "中央",
            "チュウオウ",
            "Central",
            lat=TestRailwayNetwork.HUB_LAT,
            lon=TestRailwayNetwork.HUB_LON,
            numbers=SlotTriple("01"),
        )

    @staticmethod
    def create_north_gate() -> Station:
        return TestRailwayNetwork._station(
            TestRailwayNetwork.STATION_NORTH_GATE,
            TestRailwayNetwork.GROUP_NORTH_GATE,
            TestRailwayNetwork.LINE_AMBER,
            "北門",
            "キタモン",
            "Kitamon",
            lat=35.6896,
            lon=139.7006,
            numbers=SlotTriple("10"),
            name_zh="北门",
            name_ko="북문역",
        )

    @staticmethod
    def create_sparse_junction() -> Station:
        return TestRailwayNetwork._station(
            TestRailwayNetwork.STATION_SPARSE_JUNCTION,
            TestRailwayNetwork.GROUP_SPARSE_JUNCTION,
            TestRailwayNetwork.LINE_SPARSE,
            "疎分岐",
            "ソブンキ",
            "Sobunki",
            lat=35.7100,
            lon=139.8107,
            numbers=SlotTriple("01", None, "03"),
        )

    @staticmethod
    def create_plain_halt() -> Station:
        return TestRailwayNetwork._station(
            TestRailwayNetwork.STATION_PLAIN_HALT,
            TestRailwayNetwork.GROUP_PLAIN_HALT,
            TestRailwayNetwork.LINE_PLAIN,
            "平野",
            "ヘイヤ",
            "Heiya",
            lat=35.9000,
            lon=139.9000,
            numbers=SlotTriple("5"),
        )

    @staticmethod
    def create_kiln() -> Station:
        return TestRailwayNetwork._station(
            TestRailwayNetwork.STATION_KILN,
            TestRailwayNetwork.GROUP_KILN,
            TestRailwayNetwork.LINE_SHAPELESS,
            "窯元",
            "カマモト",
            "Kamamoto",
            lat=36.0000,
            lon=140.0000,
            numbers=SlotTriple("07"),
        )

    @staticmethod
    def create_orphan() -> Station:
        return TestRailwayNetwork._station(
            TestRailwayNetwork.STATION_ORPHAN,
            TestRailwayNetwork.GROUP_ORPHAN,
            TestRailwayNetwork.LINE_CLOSED,
            "孤立",
            "コリツ",
            "Koritsu",
            lat=36.5000,
            lon=140.5000,
            numbers=SlotTriple("01"),
        )

    @staticmethod
    def create_retired() -> Station:
        return TestRailwayNetwork._station(
            TestRailwayNetwork.STATION_RETIRED,
            TestRailwayNetwork.GROUP_RETIRED,
            TestRailwayNetwork.LINE_AMBER,
            "旧中央",
            "キュウチュウオウ",
            "Old Central",
            lat=TestRailwayNetwork.HUB_LAT,
            lon=TestRailwayNetwork.HUB_LON,
            e_status=1,
        )

    # ==================== Service patterns ====================

    @staticmethod
    def create_train_types() -> list[TrainType]:
        return [
            TrainType(
                type_cd=TestRailwayNetwork.TYPE_LOCAL,
                line_group_cd=TestRailwayNetwork.LINE_GROUP_AMBER_LOCAL,
                type_name="普通",
                type_name_k="フツウ",
                type_name_r="Local",
                type_name_zh="普通",
                type_name_ko="보통",
                color="#1F63C6",
                direction=0,
                kind=0,
            ),
            TrainType(
                type_cd=TestRailwayNetwork.TYPE_RAPID,
                line_group_cd=TestRailwayNetwork.LINE_GROUP_AMBER_RAPID,
                type_name="快速",
                type_name_k="カイソク",
                type_name_r="Rapid",
                type_name_zh="快速",
                type_name_ko="쾌속",
                color="#DC143C",
                direction=0,
                kind=1,
            ),
        ]

    @staticmethod
    def create_station_links() -> list[tuple[int, int, StopCondition]]:
        """(station_cd, line_group_cd, stop_condition) in route order."""
        network = TestRailwayNetwork
        return [
            (network.STATION_HUB_AMBER, network.LINE_GROUP_AMBER_LOCAL, StopCondition.ALL),
            (network.STATION_NORTH_GATE, network.LINE_GROUP_AMBER_LOCAL, StopCondition.ALL),
            (network.STATION_HUB_AMBER, network.LINE_GROUP_AMBER_RAPID, StopCondition.ALL),
            (network.STATION_NORTH_GATE, network.LINE_GROUP_AMBER_RAPID, StopCondition.NOT),
        ]

    # ==================== Whole network ====================

    @classmethod
    def create_companies(cls) -> list[Company]:
        return [cls.create_metro_company(), cls.create_rail_company()]

    @classmethod
    def create_lines(cls) -> list[Line]:
        return [
            cls.create_amber_line(),
            cls.create_crimson_line(),
            cls.create_sparse_line(),
            cls.create_plain_line(),
            cls.create_shapeless_line(),
            cls.create_closed_line(),
            cls.create_coast_line(),
        ]

    @classmethod
    def create_stations(cls) -> list[Station]:
        return [
            cls.create_hub_amber(),
            cls.create_hub_crimson(),
            cls.create_hub_coast(),
            cls.create_north_gate(),
            cls.create_sparse_junction(),
            cls.create_plain_halt(),
            cls.create_kiln(),
            cls.create_orphan(),
            cls.create_retired(),
        ]
