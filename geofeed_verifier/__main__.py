from geofeed_verifier.cli import main

raise SystemExit(main())
