"""
ReviewSynth - Synthetic Product Review Generator

CLI entry point for generating reviews for storefront products.
"""

import argparse
import logging
import sys
from datetime import datetime, timezone

from src.analysis.review_stats import ReviewStatsAggregator
from src.errors import InvalidRequestError
from src.models.distribution import RatingDistribution
from src.models.product import Product
from src.orchestrator import GenerationOrchestrator
from src.registry.settings_registry import GenerationSettingsRegistry
from src.scheduling.daily_scheduler import DailyReviewScheduler, ScheduledReview
from src.utils.storage import StorageManager
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="ReviewSynth - Synthetic Product Review Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 5 reviews for catalog product 42
  python main.py --product-id 42

  # Product not in catalog, custom distribution and countries
  python main.py --product-id 7 --product-name "Twitch Viewers" \\
                 --category viewers --count 10 \\
                 --distribution '{"5": 70, "4": 25, "3": 5}' \\
                 --countries US,DE,GB

  # Plan today's schedule for every active catalog product
  python main.py --daily

  # Poll (e.g. from cron every 10 minutes) to publish due reviews
  python main.py --run-due
        """
    )

    parser.add_argument(
        "--product-id",
        type=int,
        help="Product to generate reviews for (required unless --daily or --run-due)"
    )

    parser.add_argument(
        "--product-name",
        help="Product name, required if the product is not in the catalog"
    )

    parser.add_argument(
        "--category",
        help=f"Product category (default: catalog value or '{settings.DEFAULT_CATEGORY}')"
    )

    parser.add_argument(
        "--count",
        type=int,
        default=settings.DEFAULT_BATCH_SIZE,
        help=f"Number of reviews, {settings.MIN_BATCH_SIZE}-{settings.MAX_BATCH_SIZE} "
             f"(default: {settings.DEFAULT_BATCH_SIZE})"
    )

    parser.add_argument(
        "--distribution",
        help="Rating weights as JSON, e.g. '{\"5\": 60, \"4\": 30}' (default: product settings)"
    )

    parser.add_argument(
        "--countries",
        help="Comma-separated ISO country codes (default: built-in list)"
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible output"
    )

    parser.add_argument(
        "--daily",
        action="store_true",
        help="Plan today's review schedule for all active catalog products"
    )

    parser.add_argument(
        "--run-due",
        action="store_true",
        help="Generate every scheduled review whose publish time has passed"
    )

    parser.add_argument(
        "--report",
        action="store_true",
        help="Write a review stats CSV after generating"
    )

    parser.add_argument(
        "--data-root",
        default=str(settings.DATA_ROOT),
        help=f"Data directory (default: {settings.DATA_ROOT})"
    )

    parser.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Report output directory (default: {settings.OUTPUT_ROOT})"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    return parser


def resolve_product(storage: StorageManager, args) -> Product:
    """Catalog product for --product-id, overridden or created from CLI flags."""
    product = storage.get_product(args.product_id)

    if product is None:
        if not args.product_name:
            raise InvalidRequestError(
                f"Product {args.product_id} not found in catalog; pass --product-name"
            )
        return Product(
            id=args.product_id,
            name=args.product_name,
            category=args.category or settings.DEFAULT_CATEGORY
        )

    if args.product_name:
        product.name = args.product_name
    if args.category:
        product.category = args.category
    return product


def parse_countries(raw):
    if raw is None:
        return None
    return [code.strip().upper() for code in raw.split(",") if code.strip()]


def run_single(orchestrator, storage, args) -> bool:
    product = resolve_product(storage, args)
    distribution = RatingDistribution.from_json(args.distribution) if args.distribution else None

    report = orchestrator.generate_and_persist(
        product=product,
        count=args.count,
        distribution=distribution,
        country_list=parse_countries(args.countries)
    )

    print(f"Stored {report.stored_count}/{report.requested} reviews for {product.name}")
    for record in report.stored:
        print(f"  #{record['id']} {record['rating']}★ {record['title']} ({record['country_code']})")
    for failure in report.failures:
        print(f"  ✗ review {failure.index}: {failure.error}")

    return report.success


def run_daily(orchestrator, storage, registry) -> bool:
    products = storage.load_products()
    if not products:
        print("No products in catalog, nothing to schedule")
        return True

    scheduler = DailyReviewScheduler(orchestrator, registry)
    schedule = scheduler.plan(products, datetime.now(timezone.utc))

    print(f"Scheduled {len(schedule)} reviews across {len(products)} products")
    for entry in schedule:
        print(f"  {entry.publish_at.isoformat()}  product {entry.product.id} #{entry.sequence}")

    # Entries not yet due from an earlier plan are kept
    pending = [ScheduledReview.from_dict(e) for e in storage.load_schedule()]
    storage.save_schedule([e.to_dict() for e in sorted(pending + schedule, key=lambda e: e.publish_at)])
    return True


def run_due(orchestrator, storage, registry, now=None) -> bool:
    scheduler = DailyReviewScheduler(orchestrator, registry)
    schedule = [ScheduledReview.from_dict(e) for e in storage.load_schedule()]

    pending, failed = scheduler.run_due(schedule, now or datetime.now(timezone.utc))
    # Failed entries stay queued so the next poll retries them
    remaining = sorted(pending + failed, key=lambda e: e.publish_at)
    storage.save_schedule([e.to_dict() for e in remaining])

    ran = len(schedule) - len(pending)
    print(f"Ran {ran} due reviews ({len(failed)} failed), {len(remaining)} still queued")
    return not failed


def main():
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if args.daily and args.run_due:
        parser.error("--daily and --run-due are mutually exclusive")
    if not (args.daily or args.run_due) and args.product_id is None:
        parser.error("--product-id is required unless --daily or --run-due is given")

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    print("=" * 60)
    print("ReviewSynth - Synthetic Product Review Generator")
    print("=" * 60)
    if args.daily:
        print("Mode: plan daily schedule")
    elif args.run_due:
        print("Mode: run due scheduled reviews")
    else:
        print(f"Product: {args.product_id}")
        print(f"Count: {args.count}")
    print(f"Data root: {args.data_root}")
    print(f"Seed: {args.seed}")
    print("=" * 60)
    print()

    try:
        storage = StorageManager(args.data_root)
        registry = GenerationSettingsRegistry(
            f"{args.data_root}/{settings.SETTINGS_REGISTRY_FILENAME}"
        )
        orchestrator = GenerationOrchestrator(
            storage=storage,
            settings_registry=registry,
            seed=args.seed
        )

        if args.daily:
            ok = run_daily(orchestrator, storage, registry)
        elif args.run_due:
            ok = run_due(orchestrator, storage, registry)
        else:
            ok = run_single(orchestrator, storage, args)

        if args.report:
            aggregator = ReviewStatsAggregator(storage)
            output_path = aggregator.generate_report(
                storage.get_all_review_product_ids(),
                output_dir=args.output_dir
            )
            print(f"Review stats: {output_path}")

        print()
        print("=" * 60)
        if ok:
            print("✅ Generation completed successfully!")
            logger.info("ReviewSynth completed successfully")
        else:
            print("⚠️  Generation completed with persistence failures")
            logger.warning("ReviewSynth completed with persistence failures")
        print("=" * 60)
        sys.exit(0 if ok else 1)

    except KeyboardInterrupt:
        logger.warning("Generation interrupted by user")
        print("\n⚠️  Generation interrupted")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Generation failed: {e}", exc_info=True)
        print(f"\n❌ Generation failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)


if __name__ == "__main__":
    main()
