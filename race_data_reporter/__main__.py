from race_data_reporter.cli import main

raise SystemExit(main())
