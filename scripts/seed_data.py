"""
기본 상점/작업 데이터 시드 스크립트
서비스 계층을 그대로 사용하므로 검증 규칙(가격 > 0, 이름 중복 금지 등)이 동일하게 적용됩니다.
"""

import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from econbot.core.exceptions import EconomyError
from econbot.database.session import get_db_context
from econbot.services.job_service import JobService
from econbot.services.shop_service import ShopService


def seed_shop_data():
    """기본 상점 상품 시드"""

    default_items = [
        {"name": "Cookie", "description": "A fresh cookie", "price": 10, "quantity": 1},
        {"name": "Lottery Ticket", "description": "Try your luck", "price": 50, "quantity": 1},
        {"name": "Arrow Bundle", "description": "Five arrows per purchase", "price": 40, "quantity": 5},
        {"name": "Custom Role", "description": "Redeem for a custom role", "price": 5000, "quantity": 1},
    ]

    try:
        with get_db_context() as db:
            shop_service = ShopService(db)
            existing = {item.name for item in shop_service.get_shop_items()}

            for item_data in default_items:
                if item_data["name"] in existing:
                    print(f"⏭️  이미 존재하는 상품: {item_data['name']}")
                    continue
                shop_service.add_item(**item_data)
                print(f"✅ 상품 추가: {item_data['name']}")

        print(f"✅ 상점 시드 데이터 생성 완료: {len(default_items)}개 상품")

    except EconomyError as e:
        print(f"❌ 상점 시드 데이터 생성 실패: {str(e)}")
        raise


def seed_job_data():
    """기본 작업 목록 시드 (작업이 하나도 없을 때만)"""

    default_jobs = [
        "Welcome three new members",
        "Post a meme in the media channel",
        "Report a bug in the bot",
    ]

    try:
        with get_db_context() as db:
            job_service = JobService(db)
            if job_service.get_all_jobs():
                print("⏭️  작업 목록이 이미 존재합니다")
                return

            for description in default_jobs:
                job = job_service.add_job(description)
                print(f"   {job.id:2d}. {job.description}")

        print(f"✅ 작업 시드 데이터 생성 완료: {len(default_jobs)}개 작업")

    except EconomyError as e:
        print(f"❌ 작업 시드 데이터 생성 실패: {str(e)}")
        raise


def main():
    """시드 데이터 실행"""
    print("🌱 시드 데이터 생성을 시작합니다...")
    print()

    print("🛒 상점 데이터 시드 중...")
    seed_shop_data()
    print()

    print("🧹 작업 데이터 시드 중...")
    seed_job_data()
    print()

    print("🎉 모든 시드 데이터 생성이 완료되었습니다!")


if __name__ == "__main__":
    main()
