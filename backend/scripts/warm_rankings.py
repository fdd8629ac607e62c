#!/usr/bin/env python3
"""도메인 랭킹 캐시 예열 스크립트.

API 와 같은 서비스 로직으로 랭킹을 조회하여, 만료된 도메인은 Tranco 에서 새로 받아 저장합니다.

사용법:
    # 도메인 직접 지정 (쉼표 구분)
    python scripts/warm_rankings.py google.com,github.com

    # 파일에서 읽기 (한 줄에 하나, # 주석 허용)
    python scripts/warm_rankings.py --file domains.txt
"""
import sys
import asyncio
import argparse
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from core.database import SessionLocal, engine, Base
from core.exceptions import RankingError
from integrations.tranco import TrancoClient
from services.ranking_service import RankingService
from services.ranking_store import RankingStore


def read_domains_file(filepath: str) -> list[str]:
    """도메인 목록 파일 로드."""
    domains = []
    with open(filepath, "r", encoding="utf-8") as f:
        for line in f:
            line = line.split("#", 1)[0].strip()
            if line:
                domains.append(line)
    return domains


async def warm(raw_domains: str) -> int:
    Base.metadata.create_all(bind=engine)

    client = TrancoClient()
    db = SessionLocal()
    try:
        service = RankingService(store=RankingStore(db), upstream=client)
        result = await service.get_rankings(raw_domains)
    except RankingError as e:
        print(f"실패: {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()
        await client.close()

    for domain, series in result.items():
        latest = f"{series.labels[-1]} #{series.ranks[-1]}" if series.labels else "-"
        print(f"{domain:40s} {len(series.labels):5d}개  최근: {latest}")
    print(f"완료: {len(result)}개 도메인")
    return 0


def main():
    parser = argparse.ArgumentParser(description="도메인 랭킹 캐시 예열")
    parser.add_argument("domains", nargs="?", default="", help="쉼표로 구분된 도메인 목록")
    parser.add_argument("--file", help="도메인 목록 파일")
    args = parser.parse_args()

    pieces = [args.domains] if args.domains else []
    if args.file:
        pieces.extend(read_domains_file(args.file))

    sys.exit(asyncio.run(warm(",".join(pieces))))


if __name__ == "__main__":
    main()
