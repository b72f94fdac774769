"""
SourcesConfig - Centralized configuration for the three legal publishers
Base URLs, request headers, source descriptions and the catalog of key laws
"""

import logging
from pathlib import Path
from typing import Dict, List

from ..schemas.document_contract import LawEntry, LegalZone
from .settings import settings


class SourcesConfig:
    """Centralized configuration for all publisher operations - Single source of truth"""

    # ========================================
    # PUBLISHER CONFIGURATION
    # ========================================
    MOJ_BASE = "https://moj.gov.ae"
    DIFC_BASE = "https://www.difclaws.com"
    ADGM_BASE = "https://adgm.com"

    BASE_URLS = {
        LegalZone.FEDERAL: MOJ_BASE,
        LegalZone.DIFC: DIFC_BASE,
        LegalZone.ADGM: ADGM_BASE,
    }

    INDEX_PATHS = {
        LegalZone.FEDERAL: "/en/legislation",
        LegalZone.DIFC: "/laws-and-regulations",
        LegalZone.ADGM: "/legal-framework",
    }

    # ========================================
    # HTTP REQUEST CONFIGURATION
    # ========================================
    HTTP_HEADERS = {
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
        'Accept-Language': 'en-US,en;q=0.9,ar;q=0.8',
        'Accept-Charset': 'utf-8',
    }

    # ========================================
    # SOURCE DESCRIPTIONS (list_sources)
    # ========================================
    LEGAL_SYSTEM_NOTE = (
        "The UAE has a three-layer legal system: (1) Federal law applies across all emirates, "
        "(2) DIFC (Dubai International Financial Centre) is an independent common-law jurisdiction "
        "within Dubai, (3) ADGM (Abu Dhabi Global Market) is an independent common-law jurisdiction "
        "within Abu Dhabi. Federal law uses Arabic as the authoritative language; DIFC and ADGM laws "
        "are drafted natively in English."
    )

    SOURCES = [
        {
            'name': 'UAE Ministry of Justice (Official Legislation Portal)',
            'authority': 'Ministry of Justice, United Arab Emirates',
            'url': 'https://moj.gov.ae',
            'license': 'Government Open Data',
            'jurisdiction': 'AE (Federal)',
            'coverage': (
                'Federal Decree-Laws, Federal Laws, Cabinet Decisions and ministerial resolutions including '
                'PDPL (45/2021), Cybercrimes Law (34/2021), Electronic Transactions Law (46/2021) '
                'and Commercial Companies Law (2/2015)'
            ),
            'languages': ['ar', 'en'],
            'legal_zone': 'federal',
        },
        {
            'name': 'DIFC Laws and Regulations',
            'authority': 'Dubai International Financial Centre (DIFC)',
            'url': 'https://difclaws.com',
            'license': 'Government Open Data',
            'jurisdiction': 'AE-DU (DIFC)',
            'coverage': (
                'DIFC Data Protection Law (Law No. 5/2020), DIFC Companies Law, DIFC Employment Law, '
                'DIFC Arbitration Law and related DIFC regulations'
            ),
            'languages': ['en'],
            'legal_zone': 'difc',
        },
        {
            'name': 'ADGM Legal Framework',
            'authority': 'Abu Dhabi Global Market (ADGM)',
            'url': 'https://adgm.com/legal-framework',
            'license': 'Government Open Data',
            'jurisdiction': 'AE-AZ (ADGM)',
            'coverage': (
                'ADGM Data Protection Regulations 2021, ADGM Companies Regulations, '
                'ADGM Financial Services and Markets Regulations and ADGM Employment Regulations'
            ),
            'languages': ['en'],
            'legal_zone': 'adgm',
        },
    ]

    # ========================================
    # KEY LAWS CATALOG (ingested in this order)
    # ========================================
    KEY_FEDERAL_LAWS: List[LawEntry] = [
        LawEntry(
            id='fdl-45-2021',
            title='المرسوم بقانون اتحادي رقم 45 لسنة 2021 بشأن حماية البيانات الشخصية',
            title_en='Federal Decree-Law No. 45 of 2021 on Personal Data Protection',
            short_name='PDPL',
            legal_zone=LegalZone.FEDERAL,
            doc_type='fdl',
            number=45,
            year=2021,
            issued_date='2021-09-20',
            in_force_date='2022-01-02',
            url='https://moj.gov.ae/en/legislation/federal-decree-law-45-2021',
        ),
        LawEntry(
            id='fdl-34-2021',
            title='المرسوم بقانون اتحادي رقم 34 لسنة 2021 في شأن مكافحة الشائعات والجرائم الإلكترونية',
            title_en='Federal Decree-Law No. 34 of 2021 on Combatting Rumours and Cybercrimes',
            short_name='Cybercrimes Law',
            legal_zone=LegalZone.FEDERAL,
            doc_type='fdl',
            number=34,
            year=2021,
            issued_date='2021-09-20',
            in_force_date='2022-01-02',
            url='https://moj.gov.ae/en/legislation/federal-decree-law-34-2021',
        ),
        LawEntry(
            id='fdl-46-2021',
            title='المرسوم بقانون اتحادي رقم 46 لسنة 2021 بشأن المعاملات الإلكترونية وخدمات الثقة',
            title_en='Federal Decree-Law No. 46 of 2021 on Electronic Transactions and Trust Services',
            short_name='ETA',
            legal_zone=LegalZone.FEDERAL,
            doc_type='fdl',
            number=46,
            year=2021,
            issued_date='2021-09-20',
            in_force_date='2022-01-02',
            url='https://moj.gov.ae/en/legislation/federal-decree-law-46-2021',
        ),
        LawEntry(
            id='fl-2-2015',
            title='القانون الاتحادي رقم 2 لسنة 2015 بشأن الشركات التجارية',
            title_en='Federal Law No. 2 of 2015 on Commercial Companies',
            short_name='Companies Law',
            legal_zone=LegalZone.FEDERAL,
            doc_type='fl',
            number=2,
            year=2015,
            issued_date='2015-03-01',
            in_force_date='2015-07-01',
            url='https://moj.gov.ae/en/legislation/federal-law-2-2015',
        ),
        LawEntry(
            id='constitution-1971',
            title='دستور دولة الإمارات العربية المتحدة',
            title_en='Constitution of the United Arab Emirates',
            short_name='Constitution',
            legal_zone=LegalZone.FEDERAL,
            doc_type='fl',
            number=0,
            year=1971,
            issued_date='1971-12-02',
            in_force_date='1971-12-02',
            url='https://moj.gov.ae/en/legislation/uae-constitution',
        ),
        LawEntry(
            id='fl-3-2003',
            title='القانون الاتحادي رقم 3 لسنة 2003 بشأن تنظيم قطاع الاتصالات',
            title_en='Federal Law No. 3 of 2003 on Telecommunications Regulation',
            short_name='Telecom Law',
            legal_zone=LegalZone.FEDERAL,
            doc_type='fl',
            number=3,
            year=2003,
            issued_date='2003-01-01',
            in_force_date='2003-01-01',
            url='https://moj.gov.ae/en/legislation/federal-law-3-2003',
        ),
    ]

    KEY_DIFC_LAWS: List[LawEntry] = [
        LawEntry(
            id='difc-law-5-2020',
            title='DIFC Data Protection Law, DIFC Law No. 5 of 2020',
            short_name='DIFC DPL',
            legal_zone=LegalZone.DIFC,
            doc_type='law',
            number=5,
            year=2020,
            issued_date='2020-07-01',
            in_force_date='2020-07-01',
            url='https://www.difclaws.com/laws-and-regulations/data-protection',
        ),
        LawEntry(
            id='difc-law-3-2006',
            title='DIFC Companies Law, DIFC Law No. 3 of 2006 (as amended)',
            short_name='DIFC Companies Law',
            legal_zone=LegalZone.DIFC,
            doc_type='law',
            number=3,
            year=2006,
            issued_date='2006-09-25',
            in_force_date='2006-09-25',
            url='https://www.difclaws.com/laws-and-regulations/companies',
        ),
        LawEntry(
            id='difc-law-4-2004',
            title='DIFC Employment Law, DIFC Law No. 4 of 2004 (as amended)',
            short_name='DIFC Employment Law',
            legal_zone=LegalZone.DIFC,
            doc_type='law',
            number=4,
            year=2004,
            issued_date='2004-09-28',
            in_force_date='2004-09-28',
            url='https://www.difclaws.com/laws-and-regulations/employment',
        ),
        LawEntry(
            id='difc-law-1-2004',
            title='DIFC Arbitration Law, DIFC Law No. 1 of 2004 (as amended)',
            short_name='DIFC Arbitration Law',
            legal_zone=LegalZone.DIFC,
            doc_type='law',
            number=1,
            year=2004,
            issued_date='2004-09-28',
            in_force_date='2004-09-28',
            url='https://www.difclaws.com/laws-and-regulations/arbitration',
        ),
    ]

    KEY_ADGM_REGULATIONS: List[LawEntry] = [
        LawEntry(
            id='adgm-dpr-2021',
            title='ADGM Data Protection Regulations 2021',
            short_name='ADGM DPR',
            legal_zone=LegalZone.ADGM,
            doc_type='regulations',
            year=2021,
            issued_date='2021-02-14',
            in_force_date='2021-02-14',
            url='https://adgm.com/legal-framework/data-protection',
        ),
        LawEntry(
            id='adgm-cr-2020',
            title='ADGM Companies Regulations 2020',
            short_name='ADGM Companies Regs',
            legal_zone=LegalZone.ADGM,
            doc_type='regulations',
            year=2020,
            issued_date='2020-01-01',
            in_force_date='2020-01-01',
            url='https://adgm.com/legal-framework/companies',
        ),
        LawEntry(
            id='adgm-er-2019',
            title='ADGM Employment Regulations 2019',
            short_name='ADGM Employment Regs',
            legal_zone=LegalZone.ADGM,
            doc_type='regulations',
            year=2019,
            issued_date='2019-01-01',
            in_force_date='2019-01-01',
            url='https://adgm.com/legal-framework/employment',
        ),
        LawEntry(
            id='adgm-fsmr-2015',
            title='ADGM Financial Services and Markets Regulations 2015',
            short_name='ADGM FSMR',
            legal_zone=LegalZone.ADGM,
            doc_type='regulations',
            year=2015,
            issued_date='2015-10-21',
            in_force_date='2015-10-21',
            url='https://adgm.com/legal-framework/financial-services',
        ),
    ]

    def __init__(self):
        """Initialize configuration - no instance variables, all class-level"""
        pass

    @classmethod
    def get_base_url(cls, zone: LegalZone) -> str:
        """Get publisher base URL for a legal zone"""
        return cls.BASE_URLS[LegalZone(zone)]

    @classmethod
    def get_index_url(cls, zone: LegalZone) -> str:
        """Get publisher index page URL for a legal zone"""
        zone = LegalZone(zone)
        return f"{cls.BASE_URLS[zone]}{cls.INDEX_PATHS[zone]}"

    @classmethod
    def get_http_headers(cls) -> Dict[str, str]:
        """Get HTTP headers for requests"""
        headers = cls.HTTP_HEADERS.copy()
        headers['User-Agent'] = settings.user_agent
        return headers

    @classmethod
    def get_sources(cls) -> List[Dict]:
        """Get source descriptions"""
        return [dict(source) for source in cls.SOURCES]

    @classmethod
    def get_catalog(cls, zone: str = "all") -> List[LawEntry]:
        """Get catalog entries for one zone (or all zones, federal first)"""
        catalog = {
            LegalZone.FEDERAL.value: cls.KEY_FEDERAL_LAWS,
            LegalZone.DIFC.value: cls.KEY_DIFC_LAWS,
            LegalZone.ADGM.value: cls.KEY_ADGM_REGULATIONS,
        }
        if zone == "all":
            return [entry for entries in catalog.values() for entry in entries]
        return list(catalog[zone])

    @classmethod
    def create_directories(cls, directories: List[Path]) -> None:
        """Create directories if they don't exist"""
        for directory in directories:
            try:
                directory.mkdir(parents=True, exist_ok=True)
                logging.getLogger(__name__).debug(f"Created directory: {directory}")
            except Exception as e:
                logging.getLogger(__name__).error(f"Failed to create directory {directory}: {str(e)}")
                raise
